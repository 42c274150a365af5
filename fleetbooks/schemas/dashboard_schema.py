from marshmallow import Schema, fields, validate, EXCLUDE
from fleetbooks.utils.timezone_utils import ANALYTICS_PERIODS, OWNER_PERIODS


class DashboardQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE
    driver_id = fields.Integer(load_default=None)
    date_from = fields.Date(load_default=None)
    date_to = fields.Date(load_default=None)


class BusinessAnalyticsQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE
    period = fields.String(load_default='30d', validate=validate.OneOf(list(ANALYTICS_PERIODS) + ['all']))


class OwnerDashboardQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE
    period = fields.String(load_default='today', validate=validate.OneOf(OWNER_PERIODS))


class OwnerAuthSchema(Schema):
    password = fields.String(required=True)
