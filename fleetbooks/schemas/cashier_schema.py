from marshmallow import Schema, fields, validate, EXCLUDE
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema
from fleetbooks.models.cashier import CashierTransaction, TransactionType
from fleetbooks.schemas.common_schema import PaginationSchema


class CashierTransactionSchema(SQLAlchemyAutoSchema):
    class Meta:
        model = CashierTransaction
        include_fk = True
        load_instance = True


class CashierInputSchema(Schema):
    class Meta:
        unknown = EXCLUDE
    type = fields.String(required=True, validate=validate.OneOf([t.value for t in TransactionType]))
    amount = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False,
                                                                 error="Amount must be greater than 0"))
    description = fields.String(required=True, validate=validate.Length(min=1, max=512))
    cashier_name = fields.String(required=True, validate=validate.Length(min=1, max=128))
    owner_authenticated = fields.Boolean(required=True)
    transaction_date = fields.Date(required=True)


class CashierQuerySchema(PaginationSchema):
    type = fields.String(load_default=None)
