import logging
from flask import current_app
from fleetbooks.extensions import db
from fleetbooks.models.driver import Driver
from fleetbooks.models.cashier import CashBalance
from fleetbooks.services.errors import ServiceError, ConflictError


class DriverService:
    @staticmethod
    def get_all():
        try:
            return Driver.query_active().order_by(Driver.name.asc()).all()
        except Exception as e:
            logging.error(f"Error fetching drivers: {e}", exc_info=True)
            raise ServiceError("Could not fetch drivers. Please try again later.", status_code=500)

    @staticmethod
    def get_by_id(driver_id, include_inactive=False):
        try:
            query = Driver.query if include_inactive else Driver.query_active()
            return query.filter_by(id=driver_id).first()
        except Exception as e:
            logging.error(f"Error fetching driver: {e}", exc_info=True)
            raise ServiceError("Could not fetch driver. Please try again later.", status_code=500)

    @staticmethod
    def create(data):
        if Driver.query.filter_by(name=data['name']).first():
            raise ConflictError("Driver with this name already exists")
        try:
            driver = Driver(
                name=data['name'],
                commission_percentage=data['commission_percentage'],
                total_earnings=0.0,
                total_salary_paid=0.0,
                pending_salary=0.0,
                is_active=True,
            )
            db.session.add(driver)
            db.session.commit()
            logging.info(f"Created driver {driver.name} ({driver.commission_percentage}%)")
            return driver
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating driver: {e}", exc_info=True)
            raise ServiceError("Could not create driver. Please try again later.", status_code=500)

    @staticmethod
    def update(driver_id, data):
        driver = DriverService.get_by_id(driver_id, include_inactive=True)
        if not driver:
            return None
        new_name = data.get('name')
        if new_name and new_name != driver.name:
            if Driver.query.filter(Driver.name == new_name, Driver.id != driver.id).first():
                raise ConflictError("Driver with this name already exists")
        try:
            for key in ('name', 'commission_percentage'):
                if key in data:
                    setattr(driver, key, data[key])
            db.session.commit()
            return driver
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error updating driver: {e}", exc_info=True)
            raise ServiceError("Could not update driver. Please try again later.", status_code=500)

    @staticmethod
    def set_active(driver_id, is_active):
        try:
            # Include inactive drivers so they can be reactivated
            driver = Driver.query.filter_by(id=driver_id).first()
            if not driver:
                return None
            driver.is_active = is_active
            db.session.commit()
            logging.info(f"Driver {driver.name} {'reactivated' if is_active else 'deactivated'}")
            return driver
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error updating driver status: {e}", exc_info=True)
            raise ServiceError("Could not update driver status. Please try again later.", status_code=500)

    @staticmethod
    def seed_defaults():
        """
        Create the default roster and the cash balance row on an empty database.

        Returns (created_drivers, existing_count). When drivers already exist
        nothing is created and created_drivers is empty.
        """
        try:
            existing = Driver.query.count()
            if existing > 0:
                return [], existing

            drivers = [
                Driver(name=entry['name'], commission_percentage=entry['commission_percentage'])
                for entry in current_app.config['DEFAULT_DRIVERS']
            ]
            db.session.add_all(drivers)
            if CashBalance.current() is None:
                db.session.add(CashBalance(current_balance=0.0))
            db.session.commit()
            logging.info(f"Initialized {len(drivers)} default drivers")
            return drivers, 0
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error initializing system: {e}", exc_info=True)
            raise ServiceError("Could not initialize system. Please try again later.", status_code=500)
