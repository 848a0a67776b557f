from kanban.db.models import Board
from kanban.services.access import can_edit, can_modify_contents, can_view, is_admin


def make_board(visibility: str = "private", **members: list[int]) -> Board:
    board = Board(name="B", project_id=1, visibility=visibility)
    for role, user_ids in members.items():
        board.set_members(role, user_ids)
    return board


def test_public_board_is_viewable_by_anyone():
    assert can_view(make_board("public"), 42)
    assert can_view(make_board("public", view=[1], edit=[1], admin=[1], administrator=[1]), 42)


def test_private_board_rejects_unrelated_user():
    board = make_board(view=[1], edit=[2], admin=[3], administrator=[4])
    assert not can_view(board, 99)
    assert not can_edit(board, 99)
    assert not is_admin(board, 99)
    assert not can_modify_contents(board, 99)


def test_any_membership_set_grants_view():
    for role in ("view", "edit", "admin", "administrator"):
        assert can_view(make_board(**{role: [7]}), 7)


def test_empty_sets_mean_no_one():
    board = make_board()
    assert not can_view(board, 1)
    assert not can_edit(board, 1)


def test_edit_comes_from_edit_or_admin_set():
    assert can_edit(make_board(edit=[5]), 5)
    assert can_edit(make_board(admin=[5]), 5)
    assert not can_edit(make_board(view=[5]), 5)


def test_administrators_are_not_edit_capable():
    # Pinned behaviour: the administrators set is absent from the edit predicate.
    board = make_board(administrator=[5])
    assert not can_edit(board, 5)
    assert is_admin(board, 5)
    assert can_modify_contents(board, 5)


def test_admin_set_without_edit_cannot_modify_contents():
    board = make_board(admin=[6])
    assert can_edit(board, 6)
    assert not can_modify_contents(board, 6)


def test_set_members_replaces_one_role_only():
    board = make_board(view=[1, 2], edit=[2])
    board.set_members("view", [3])
    assert board.permissions["view"] == {3}
    assert board.permissions["edit"] == {2}
