from marshmallow import Schema, fields, validate
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema, auto_field
from fleetbooks.models.driver import Driver


class DriverSchema(SQLAlchemyAutoSchema):
    class Meta:
        model = Driver
        load_instance = True
    id = auto_field(dump_only=True)
    name = auto_field()
    commission_percentage = auto_field()
    total_earnings = auto_field(dump_only=True)
    total_salary_paid = auto_field(dump_only=True)
    pending_salary = auto_field(dump_only=True)
    is_active = auto_field(dump_only=True)
    created_at = auto_field(dump_only=True)
    updated_at = auto_field(dump_only=True)


class DriverCreateSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=128))
    commission_percentage = fields.Float(
        required=True, validate=validate.Range(min=0, max=100, min_inclusive=False))


class DriverUpdateSchema(Schema):
    name = fields.String(validate=validate.Length(min=1, max=128))
    commission_percentage = fields.Float(validate=validate.Range(min=0, max=100, min_inclusive=False))


class DriverActiveSchema(Schema):
    is_active = fields.Boolean(required=True)
