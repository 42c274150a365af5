from marshmallow import Schema, fields, validate, EXCLUDE
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema
from fleetbooks.models.monthly_salary_summary import MonthlySalarySummary

_month = validate.Range(min=1, max=12)
_year = validate.Range(min=2000, max=2100)


class MonthlySalarySummarySchema(SQLAlchemyAutoSchema):
    class Meta:
        model = MonthlySalarySummary
        include_fk = True
        load_instance = True


class MonthlySalaryQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE
    driver_id = fields.Integer(required=True, error_messages={'required': 'Driver ID is required'})
    month = fields.Integer(load_default=None, validate=_month)
    year = fields.Integer(load_default=None, validate=_year)


class MonthlySummaryRangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE
    drivers = fields.List(fields.Integer(), load_default=list)
    start_month = fields.Integer(load_default=None, validate=_month)
    start_year = fields.Integer(load_default=None, validate=_year)
    end_month = fields.Integer(load_default=None, validate=_month)
    end_year = fields.Integer(load_default=None, validate=_year)
