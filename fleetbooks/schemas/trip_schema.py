from marshmallow import Schema, fields, validate, EXCLUDE
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema
from fleetbooks.models.trip import Trip, Platform, NegativeCashOption
from fleetbooks.schemas.common_schema import PaginationSchema

_money = dict(load_default=0.0, validate=validate.Range(min=0))


class TripSchema(SQLAlchemyAutoSchema):
    class Meta:
        model = Trip
        include_fk = True
        load_instance = True


class FuelEntrySchema(Schema):
    class Meta:
        unknown = EXCLUDE
    id = fields.String(allow_none=True, load_default=None)
    amount = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    description = fields.String(load_default="")


class TripInputSchema(Schema):
    """Trip form payload: per-platform earnings and cash plus the day's expenses."""

    class Meta:
        unknown = EXCLUDE

    driver_id = fields.Integer(required=True)
    trip_date = fields.Date(required=True)
    platform = fields.String(load_default=Platform.MULTIPLE.value,
                             validate=validate.OneOf([p.value for p in Platform]))
    start_km = fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0))
    end_km = fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0))
    total_km = fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0))

    uber_earnings = fields.Float(**_money)
    indrive_earnings = fields.Float(**_money)
    yatri_earnings = fields.Float(**_money)
    rapido_earnings = fields.Float(**_money)
    offline_earnings = fields.Float(**_money)
    uber_cash = fields.Float(**_money)
    indrive_cash = fields.Float(**_money)
    yatri_cash = fields.Float(**_money)
    rapido_cash = fields.Float(**_money)
    offline_cash = fields.Float(**_money)

    has_uber_commission = fields.Boolean(load_default=False)
    yatri_trips = fields.Integer(load_default=0, validate=validate.Range(min=0))

    fuel_entries = fields.List(fields.Nested(FuelEntrySchema), load_default=list)
    other_expenses = fields.Float(**_money)
    online_payment = fields.Float(**_money)
    cash_to_cashier = fields.Float(**_money)
    driver_took_salary = fields.Boolean(load_default=False)
    cash_given_to_cashier = fields.Boolean(load_default=False)
    negative_handling_option = fields.String(
        allow_none=True, load_default=None,
        validate=validate.OneOf([o.value for o in NegativeCashOption]))
    amount_from_cashier = fields.Float(**_money)
    notes = fields.String(allow_none=True, load_default=None)


class TripPreviewSchema(TripInputSchema):
    trip_date = fields.Date(load_default=None)


class TripQuerySchema(PaginationSchema):
    driver_id = fields.Integer(load_default=None)
    platform = fields.String(load_default=None, validate=validate.OneOf([p.value for p in Platform]))
    date = fields.Date(load_default=None)
