"""Bulk user administration API.

Service errors (NotFound, InvalidSortField, PersistenceFailure,
AuthorizationDenied) and marshmallow ValidationErrors propagate to the
app-level error handlers registered in create_app.
"""
from flask import Blueprint, jsonify, request, current_app
from flask_jwt_extended import jwt_required

from bulk_user_admin.extensions import db
from bulk_user_admin.models.AuditLog import BULK_USERS_UPDATED, BULK_USERS_DELETED
from bulk_user_admin.schemas.bulk_user_schema import (
    ListUsersQuerySchema, BulkUserUpdateSchema, BulkUserDeleteSchema,
    PagedUserListSchema, RoleSchema, SectionSchema,
)
from bulk_user_admin.security_utils import audit_log
from bulk_user_admin.services import UserDirectory, SectionRegistry, UserAdministrationQueryService
from bulk_user_admin.utils.api_helper import ok, bulk_audit_detail
from bulk_user_admin.utils.decorator import require_sections

bulk_user_bp = Blueprint('bulk_user_bp', __name__)


def _service():
    cfg = current_app.config
    return UserAdministrationQueryService(
        UserDirectory(db.session),
        SectionRegistry(db.session),
        fetch_size=cfg.get('BULK_USER_ADMIN_FETCH_SIZE', 1000),
        admin_section=cfg.get('ADMIN_SECTION', 'users'),
    )


def _single_target(bulk):
    return bulk.user_ids[0] if len(bulk.user_ids) == 1 else None


@bulk_user_bp.get('/users')
@jwt_required()
@require_sections()
def list_users(capability):
    """List users with free-text filter, sorting and paging."""
    params = ListUsersQuerySchema().load(request.args)
    result = _service().list_users(
        capability,
        page=params['page'],
        sort_field=params['sort_by'],
        sort_direction=params['sort_dir'],
        filter_text=params['q'],
    )
    return jsonify(PagedUserListSchema().dump(result))


@bulk_user_bp.get('/roles')
@jwt_required()
@require_sections()
def list_roles(capability):
    roles = _service().list_roles(capability)
    return jsonify(RoleSchema(many=True).dump(roles))


@bulk_user_bp.get('/sections')
@jwt_required()
@require_sections()
def list_sections(capability):
    sections = _service().list_sections(capability)
    return jsonify(SectionSchema(many=True).dump(sections))


@bulk_user_bp.post('/users/update')
@jwt_required()
@require_sections()
def update_users(capability):
    data = request.get_json(force=True, silent=True) or {}
    bulk = BulkUserUpdateSchema().load(data)
    updated = _service().update_users(capability, bulk)
    audit_log(BULK_USERS_UPDATED, user_id=capability.actor_id, target_user_id=_single_target(bulk),
              detail=bulk_audit_detail(updated, bulk.user_ids))
    return ok(updated=updated)


@bulk_user_bp.post('/users/delete')
@jwt_required()
@require_sections()
def delete_users(capability):
    data = request.get_json(force=True, silent=True) or {}
    bulk = BulkUserDeleteSchema().load(data)
    deleted = _service().delete_users(capability, bulk)
    audit_log(BULK_USERS_DELETED, user_id=capability.actor_id, target_user_id=_single_target(bulk),
              detail=bulk_audit_detail(deleted, bulk.user_ids))
    return ok(deleted=deleted)
