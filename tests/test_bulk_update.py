import pytest

from bulk_user_admin.errors import AuthorizationDenied, NotFound, PersistenceFailure
from bulk_user_admin.models.bulk_update import BulkUpdateRequest, FieldUpdate
from bulk_user_admin.security import AdminCapability
from bulk_user_admin.services import UserAdministrationQueryService
from bulk_user_admin.services.bulk_user_admin_service import apply_changes, diff_user

from tests.fakes import FakeDirectory, FakeUser


def test_disable_user_clears_approval_and_saves_once(service, fake_directory, admin):
    request = BulkUpdateRequest(user_ids=[1], disabled=FieldUpdate(True, True))
    assert service.update_users(admin, request) == 1
    assert fake_directory.users[1].is_approved is False
    assert fake_directory.saved == [1]


def test_second_identical_update_saves_nobody(service, fake_directory, admin):
    request = BulkUpdateRequest(
        user_ids=[1, 2, 3],
        role=FieldUpdate(True, 3),
        locked_out=FieldUpdate(True, False),
        disabled=FieldUpdate(True, False),
        start_content_node=FieldUpdate(True, 1050),
        start_media_node=FieldUpdate(True, 2010),
        sections=FieldUpdate(True, ['content', 'users']),
    )
    service.update_users(admin, request)
    state = [(u.role.id, u.is_locked_out, u.is_approved, u.start_content_id,
              u.start_media_id, sorted(u.allowed_sections)) for u in fake_directory.users.values()]

    fake_directory.saved.clear()
    assert service.update_users(admin, request) == 0
    assert fake_directory.saved == []
    assert state == [(u.role.id, u.is_locked_out, u.is_approved, u.start_content_id,
                      u.start_media_id, sorted(u.allowed_sections)) for u in fake_directory.users.values()]


def test_unchanged_values_do_not_trigger_save(service, fake_directory, admin):
    # Ada is already an Editor, approved and not locked out
    request = BulkUpdateRequest(
        user_ids=[1],
        role=FieldUpdate(True, 3),
        locked_out=FieldUpdate(True, False),
        disabled=FieldUpdate(True, False),
    )
    assert service.update_users(admin, request) == 0
    assert fake_directory.saved == []


def test_values_without_apply_flag_are_ignored(service, fake_directory, admin):
    request = BulkUpdateRequest(
        user_ids=[1, 2],
        locked_out=FieldUpdate(False, True),
        start_content_node=FieldUpdate(False, 1234),
        sections=FieldUpdate(False, []),
    )
    assert service.update_users(admin, request) == 0
    assert fake_directory.users[1].start_content_id == -1
    assert fake_directory.users[2].allowed_sections == ['content', 'media']


def test_zero_role_id_is_a_no_op(service, fake_directory, admin):
    request = BulkUpdateRequest(user_ids=[1, 2], role=FieldUpdate(True, 0))
    assert service.update_users(admin, request) == 0
    assert fake_directory.users[1].role.name == 'Editor'


def test_role_change_is_shared_across_users(service, fake_directory, admin):
    request = BulkUpdateRequest(user_ids=[1, 2, 3], role=FieldUpdate(True, 1))
    assert service.update_users(admin, request) == 2
    assert {u.role.name for u in fake_directory.users.values()} == {'Writer'}
    assert fake_directory.saved == [1, 3]


def test_unknown_role_fails_before_any_user_is_touched(service, fake_directory, admin):
    request = BulkUpdateRequest(user_ids=[1], role=FieldUpdate(True, 42), disabled=FieldUpdate(True, True))
    with pytest.raises(NotFound) as exc:
        service.update_users(admin, request)
    assert exc.value.kind == 'role'
    assert fake_directory.saved == []


def test_unknown_section_is_rejected(service, fake_directory, admin):
    request = BulkUpdateRequest(user_ids=[1], sections=FieldUpdate(True, ['content', 'bogus']))
    with pytest.raises(NotFound) as exc:
        service.update_users(admin, request)
    assert exc.value.kind == 'section'


def test_lockout_and_start_nodes(service, fake_directory, admin):
    request = BulkUpdateRequest(
        user_ids=[1],
        locked_out=FieldUpdate(True, True),
        start_content_node=FieldUpdate(True, 1050),
        start_media_node=FieldUpdate(True, 2010),
    )
    service.update_users(admin, request)
    ada = fake_directory.users[1]
    assert ada.is_locked_out is True
    assert ada.start_content_id == 1050
    assert ada.start_media_id == 2010
    assert fake_directory.saved == [1]


def test_sections_are_reconciled_as_sets(roles):
    user = FakeUser(1, 'A', 'a@example.com', roles['writer'], allowed_sections=['A', 'B'])
    request = BulkUpdateRequest(user_ids=[1], sections=FieldUpdate(True, ['B', 'C']))
    changes = diff_user(user, request, None)
    assert changes == {'allowed_sections': ({'A'}, {'C'})}
    apply_changes(user, changes)
    assert sorted(user.allowed_sections) == ['B', 'C']


def test_section_order_does_not_count_as_a_change(roles):
    user = FakeUser(1, 'A', 'a@example.com', roles['writer'], allowed_sections=['media', 'content'])
    request = BulkUpdateRequest(user_ids=[1], sections=FieldUpdate(True, ['content', 'media']))
    assert diff_user(user, request, None) == {}


def test_missing_user_stops_the_batch(service, fake_directory, admin):
    request = BulkUpdateRequest(user_ids=[1, 77, 3], disabled=FieldUpdate(True, True))
    with pytest.raises(NotFound) as exc:
        service.update_users(admin, request)
    assert exc.value.ident == 77
    # user 1 stays persisted, user 3 is never reached
    assert fake_directory.saved == [1]
    assert fake_directory.users[3].is_approved is False  # already disabled before the call


def test_persist_failure_is_not_retried_or_skipped(roles, fake_users, fake_sections, admin):
    directory = FakeDirectory(fake_users, roles.values(), fail_save_on=2)
    service = UserAdministrationQueryService(directory, fake_sections)
    request = BulkUpdateRequest(user_ids=[1, 2, 3], start_content_node=FieldUpdate(True, 500))
    with pytest.raises(PersistenceFailure):
        service.update_users(admin, request)
    assert directory.saved == [1]
    assert directory.users[3].start_content_id == -1


def test_delete_issues_one_permanent_delete_per_user_in_order(service, fake_directory, admin):
    assert service.delete_users(admin, BulkUpdateRequest(user_ids=[3, 1])) == 2
    assert fake_directory.deleted == [(3, True), (1, True)]
    assert list(fake_directory.users) == [2]


def test_delete_stops_at_unknown_user(service, fake_directory, admin):
    with pytest.raises(NotFound):
        service.delete_users(admin, BulkUpdateRequest(user_ids=[2, 50, 1]))
    assert fake_directory.deleted == [(2, True)]


def test_mutations_require_users_section(service, fake_directory):
    outsider = AdminCapability(actor_id='5', sections=frozenset({'content'}))
    with pytest.raises(AuthorizationDenied):
        service.update_users(outsider, BulkUpdateRequest(user_ids=[1], disabled=FieldUpdate(True, True)))
    with pytest.raises(AuthorizationDenied):
        service.delete_users(outsider, BulkUpdateRequest(user_ids=[1]))
    assert fake_directory.saved == []
    assert fake_directory.deleted == []
