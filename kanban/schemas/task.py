"""Task-related Marshmallow schemas."""

from datetime import timezone

from marshmallow import RAISE, Schema, fields, validate

from kanban.columns import Column


class UTCDateTime(fields.DateTime):
    """ISO-8601 datetime that always carries an offset.

    Stores without timezone support (SQLite) hand back naive values; those
    are UTC by construction.
    """

    def _serialize(self, value, attr, obj, **kwargs):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return super()._serialize(value, attr, obj, **kwargs)


class TaskSchema(Schema):
    """Schema for task serialization."""

    id = fields.Str(dump_only=True)
    content = fields.Str(dump_only=True)
    column = fields.Enum(Column, by_value=True, dump_only=True)
    created_at = UTCDateTime(data_key="createdAt", dump_only=True, format="iso")
    updated_at = UTCDateTime(data_key="updatedAt", dump_only=True, format="iso")


class TaskCreateSchema(Schema):
    """Schema for task creation validation."""

    class Meta:
        unknown = RAISE

    content = fields.Str(required=True, validate=validate.Length(min=1))


class TaskMoveSchema(Schema):
    """Schema for task move validation.

    The column is kept as a raw string; normalization happens in the service
    so that every caller gets the same alias handling.
    """

    class Meta:
        unknown = RAISE

    column = fields.Str(required=True)
