from marshmallow import Schema, fields, validate, EXCLUDE
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema
from fleetbooks.models.salary_payment import SalaryPayment, PaymentMethod
from fleetbooks.schemas.common_schema import PaginationSchema


class SalaryPaymentSchema(SQLAlchemyAutoSchema):
    class Meta:
        model = SalaryPayment
        include_fk = True
        load_instance = True


class SalaryPaymentInputSchema(Schema):
    class Meta:
        unknown = EXCLUDE
    driver_id = fields.Integer(required=True)
    amount = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    payment_date = fields.Date(required=True)
    payment_method = fields.String(required=True, validate=validate.OneOf([m.value for m in PaymentMethod]))
    notes = fields.String(allow_none=True, load_default=None)


class SalaryPaymentQuerySchema(PaginationSchema):
    driver_id = fields.Integer(load_default=None)
