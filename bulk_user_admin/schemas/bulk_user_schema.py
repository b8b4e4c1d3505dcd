from marshmallow import Schema, fields, validate, validates, post_load, ValidationError, EXCLUDE

from bulk_user_admin.extensions import ma
from bulk_user_admin.models.Role import Role
from bulk_user_admin.models.Section import Section
from bulk_user_admin.models.User import ROOT_NODE_ID
from bulk_user_admin.models.bulk_update import BulkUpdateRequest, FieldUpdate
from bulk_user_admin.models.enumerations import OrderDirection


class ListUsersQuerySchema(Schema):
    """Query string of GET /users: ?page=0&sort_by=Name&sort_dir=asc&q=..."""
    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=0, validate=validate.Range(min=0))
    sort_by = fields.String(load_default='Name')
    sort_dir = fields.String(load_default=OrderDirection.ASCENDING.value)
    q = fields.String(load_default='')

    @validates('sort_dir')
    def _validate_sort_dir(self, value, **kwargs):
        try:
            OrderDirection.parse(value)
        except ValueError:
            raise ValidationError('Must be one of: asc, desc, ascending, descending.')

    @post_load
    def normalize(self, data, **kwargs):
        data['sort_dir'] = OrderDirection.parse(data['sort_dir'])
        return data


class BulkUserUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE  # Ignore extra fields on load

    user_ids = fields.List(fields.Integer(), required=True)

    role_id = fields.Integer(load_default=0)
    update_role = fields.Boolean(load_default=False)

    update_backoffice_access = fields.Boolean(load_default=False)
    disable_backoffice_access = fields.Boolean(load_default=False)

    update_active = fields.Boolean(load_default=False)
    disable_user = fields.Boolean(load_default=False)

    update_start_content_node = fields.Boolean(load_default=False)
    start_content_node_id = fields.Integer(load_default=ROOT_NODE_ID)

    update_start_media_node = fields.Boolean(load_default=False)
    start_media_node_id = fields.Integer(load_default=ROOT_NODE_ID)

    update_sections = fields.Boolean(load_default=False)
    sections = fields.List(fields.String(validate=validate.Length(min=1, max=64)), load_default=list)

    @post_load
    def make_request(self, data, **kwargs):
        return BulkUpdateRequest(
            user_ids=data['user_ids'],
            role=FieldUpdate(data['update_role'], data['role_id']),
            locked_out=FieldUpdate(data['update_backoffice_access'], data['disable_backoffice_access']),
            disabled=FieldUpdate(data['update_active'], data['disable_user']),
            start_content_node=FieldUpdate(data['update_start_content_node'], data['start_content_node_id']),
            start_media_node=FieldUpdate(data['update_start_media_node'], data['start_media_node_id']),
            sections=FieldUpdate(data['update_sections'], list(data['sections'])),
        )


class BulkUserDeleteSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_ids = fields.List(fields.Integer(), required=True)

    @post_load
    def make_request(self, data, **kwargs):
        return BulkUpdateRequest(user_ids=data['user_ids'])


class UserListItemSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    email = fields.String()
    role = fields.String()
    active = fields.Boolean()


class PagedUserListSchema(Schema):
    total = fields.Integer()
    page = fields.Integer()
    page_size = fields.Integer()
    pages = fields.Integer()
    items = fields.List(fields.Nested(UserListItemSchema))


class RoleSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Role
        exclude = ('alias',)


class SectionSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Section
        exclude = ('sort_order',)
