from marshmallow import Schema, fields, validate, EXCLUDE


class PaginationSchema(Schema):
    class Meta:
        unknown = EXCLUDE
    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(load_default=None, validate=validate.Range(min=1))


def resolve_limit(limit, config):
    """Page size from the query string, defaulted and capped by configuration."""
    limit = limit or config['DEFAULT_PAGE_SIZE']
    return min(limit, config['MAX_PAGE_SIZE'])
