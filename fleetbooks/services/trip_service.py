import logging
import math
from flask import current_app
from fleetbooks.extensions import db
from fleetbooks.models.driver import Driver
from fleetbooks.models.trip import Trip, Platform, NegativeCashOption
from fleetbooks.models.cashier import TransactionType
from fleetbooks.services.cashier_service import CashierService
from fleetbooks.services.errors import ServiceError
from fleetbooks.services.reconciliation import (
    TripInput,
    PlatformEntry,
    FuelEntry,
    build_platform_details,
    calculate_driver_ledger_delta,
    calculate_trip_financials,
    to_paise,
)


class TripService:
    @staticmethod
    def build_trip_input(data, commission_percentage):
        platforms = {
            name: PlatformEntry(
                earnings=data.get(f'{name}_earnings') or 0.0,
                cash=data.get(f'{name}_cash') or 0.0,
            )
            for name in Platform.earning_platforms()
        }
        return TripInput(
            commission_percentage=commission_percentage,
            platforms=platforms,
            has_uber_commission=data.get('has_uber_commission', False),
            yatri_trips=data.get('yatri_trips') or 0,
            fuel_entries=[FuelEntry(**entry) for entry in data.get('fuel_entries') or []],
            other_expenses=data.get('other_expenses') or 0.0,
            online_payment=data.get('online_payment') or 0.0,
            cash_to_cashier=data.get('cash_to_cashier') or 0.0,
            driver_took_salary=data.get('driver_took_salary', False),
            negative_handling_option=data.get('negative_handling_option'),
            amount_from_cashier=data.get('amount_from_cashier') or 0.0,
        )

    @staticmethod
    def calculate(trip_input):
        return calculate_trip_financials(
            trip_input,
            uber_daily_commission=current_app.config['UBER_DAILY_COMMISSION'],
            yatri_commission_per_trip=current_app.config['YATRI_COMMISSION_PER_TRIP'],
        )

    @staticmethod
    def preview(data):
        """Financials for a trip form without saving anything."""
        driver = Driver.query_active().filter_by(id=data['driver_id']).first()
        if not driver:
            return None
        trip_input = TripService.build_trip_input(data, driver.commission_percentage)
        return TripService.calculate(trip_input)

    @staticmethod
    def create(data):
        driver = Driver.query_active().filter_by(id=data['driver_id']).first()
        if not driver:
            return None

        trip_input = TripService.build_trip_input(data, driver.commission_percentage)
        financials = TripService.calculate(trip_input)

        option = trip_input.negative_handling_option
        if financials.is_negative and not option:
            raise ServiceError(
                f"Cash in hand is negative (₹{financials.cash_in_hand:.2f}). "
                f"Choose whether to add it to salary or take it from the cashier."
            )

        amount_from_cashier = trip_input.amount_from_cashier
        if option == NegativeCashOption.CASHIER.value and financials.is_negative and not amount_from_cashier:
            amount_from_cashier = financials.shortfall

        start_km, end_km, total_km = data.get('start_km'), data.get('end_km'), data.get('total_km')
        if total_km is None and start_km is not None and end_km is not None:
            total_km = end_km - start_km

        try:
            trip = Trip(
                driver_id=driver.id,
                driver_name=driver.name,
                platform=data.get('platform') or Platform.MULTIPLE.value,
                trip_date=data['trip_date'],
                start_km=start_km,
                end_km=end_km,
                total_km=total_km,
                trip_amount=financials.total_earnings,
                commission_amount=financials.total_commission,
                fuel_cost=financials.fuel_cost,
                other_expenses=financials.other_expenses,
                cash_collected=financials.total_cash_collected,
                online_payment=financials.online_payment,
                net_amount=financials.net_earnings,
                cash_in_hand=financials.cash_in_hand,
                cash_in_driver_hand=financials.cash_in_hand,
                driver_salary=financials.driver_salary,
                driver_took_salary=trip_input.driver_took_salary,
                cash_given_to_cashier=data.get('cash_given_to_cashier', False),
                cash_to_cashier=financials.cash_to_cashier,
                negative_handling_option=option,
                amount_from_cashier=amount_from_cashier,
                notes=data.get('notes'),
                platform_details=build_platform_details(trip_input, financials),
                commission_details={
                    'uber': financials.uber_commission,
                    'yatri': financials.yatri_commission,
                    'total': financials.total_commission,
                },
                fuel_entries=[entry.model_dump() for entry in trip_input.fuel_entries],
            )
            db.session.add(trip)
            db.session.flush()

            if option == NegativeCashOption.CASHIER.value and amount_from_cashier > 0:
                CashierService.apply_transaction(
                    TransactionType.WITHDRAWAL.value,
                    amount_from_cashier,
                    f"Cash deficit covered for trip - Driver: {driver.name}",
                    'System',
                    trip.trip_date,
                    owner_authenticated=True,
                    trip_id=trip.id,
                )

            delta = calculate_driver_ledger_delta(financials, trip_input.driver_took_salary, option)
            driver.total_earnings = to_paise((driver.total_earnings or 0.0) + delta.earnings)
            driver.total_salary_paid = to_paise((driver.total_salary_paid or 0.0) + delta.salary_paid)
            driver.pending_salary = to_paise((driver.pending_salary or 0.0) + delta.pending_salary)

            db.session.commit()
            logging.info(f"Trip {trip.id} recorded for {driver.name} on {trip.trip_date}: "
                         f"earnings ₹{trip.trip_amount}, cash in hand ₹{trip.cash_in_driver_hand}")
            return trip
        except Exception as e:
            db.session.rollback()
            logging.error(f"Error creating trip: {e}", exc_info=True)
            raise ServiceError("Could not create trip. Please try again later.", status_code=500)

    @staticmethod
    def list_trips(driver_id=None, platform=None, trip_date=None, page=1, limit=50):
        try:
            query = Trip.query
            if driver_id:
                query = query.filter(Trip.driver_id == driver_id)
            if platform:
                query = query.filter(Trip.platform == platform)
            if trip_date:
                query = query.filter(Trip.trip_date == trip_date)
            query = query.order_by(Trip.trip_date.desc(), Trip.created_at.desc())
            pagination = query.paginate(page=page, per_page=limit, error_out=False)
            return {
                'trips': pagination.items,
                'total_trips': pagination.total,
                'current_page': page,
                'total_pages': math.ceil(pagination.total / limit) if limit else 0,
            }
        except Exception as e:
            logging.error(f"Error fetching trips: {e}", exc_info=True)
            raise ServiceError("Could not fetch trips. Please try again later.", status_code=500)

    @staticmethod
    def trips_between(date_from=None, date_to=None, driver_ids=None):
        """Trips in an inclusive date window, newest first."""
        query = Trip.query
        if date_from:
            query = query.filter(Trip.trip_date >= date_from)
        if date_to:
            query = query.filter(Trip.trip_date <= date_to)
        if driver_ids is not None:
            query = query.filter(Trip.driver_id.in_(driver_ids))
        return query.order_by(Trip.trip_date.desc(), Trip.created_at.desc()).all()

    @staticmethod
    def count_between(date_from, date_to):
        return Trip.query.filter(Trip.trip_date >= date_from, Trip.trip_date <= date_to).count()
