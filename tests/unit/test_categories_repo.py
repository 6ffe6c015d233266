import pytest

from portal.db import models
from portal.db.repositories import categories as category_repo
from portal.errors import NotFoundError


def test_delete_category_cascades_to_items(db):
    category = category_repo.create_category(db, title="Benefits", target="EMPLOYEE")
    first = category_repo.add_item(db, category.id, title="Leave", description="Annual leave")
    second = category_repo.add_item(db, category.id, title="Health", description="Insurance")

    category_repo.delete_category(db, category.id)

    assert category_repo.get_category(db, category.id) is None
    assert category_repo.get_item(db, first.id) is None
    assert category_repo.get_item(db, second.id) is None
    assert category_repo.get_items_by_category(db, category.id) == []
    assert db.query(models.DictionaryItem).count() == 0


def test_storage_cascade_applies_without_orm(db):
    category = category_repo.create_category(db, title="Rules", target="STUDENT")
    category_repo.add_item(db, category.id, title="Exams", description="Schedule")
    db.query(models.Category).filter(models.Category.id == category.id).delete(synchronize_session=False)
    db.commit()
    assert db.query(models.DictionaryItem).count() == 0


def test_add_item_to_missing_category(db):
    with pytest.raises(NotFoundError) as exc:
        category_repo.add_item(db, 404, title="x", description="y")
    assert exc.value.code == "CATEGORY_NOT_FOUND"


def test_filter_by_target_is_exact(db):
    category_repo.create_category(db, title="A", target="EMPLOYEE")
    category_repo.create_category(db, title="B", target="STUDENT")
    category_repo.create_category(db, title="C", target="EMPLOYEE")
    employee = category_repo.get_categories(db, target="EMPLOYEE")
    assert {c.title for c in employee} == {"A", "C"}
    assert all(c.target == "EMPLOYEE" for c in employee)
    assert len(category_repo.get_categories(db)) == 3


def test_list_is_newest_first(db):
    for title in ("old", "mid", "new"):
        category_repo.create_category(db, title=title, target="EMPLOYEE")
    assert [c.title for c in category_repo.get_categories(db)] == ["new", "mid", "old"]


def test_entries_are_ordered_by_id(db):
    category = category_repo.create_category(db, title="A", target="EMPLOYEE")
    for title in ("one", "two", "three"):
        category_repo.add_item(db, category.id, title=title, description="-")
    db.expire_all()
    loaded = category_repo.get_category(db, category.id)
    assert [e.title for e in loaded.entries] == ["one", "two", "three"]


def test_partial_update_keeps_other_fields(db):
    category = category_repo.create_category(db, title="A", target="EMPLOYEE")
    updated = category_repo.update_category(db, category.id, {"title": "B"})
    assert updated.title == "B"
    assert updated.target == "EMPLOYEE"


def test_update_and_delete_missing_item(db):
    with pytest.raises(NotFoundError):
        category_repo.update_item(db, 5, {"title": "x"})
    with pytest.raises(NotFoundError) as exc:
        category_repo.delete_item(db, 5)
    assert exc.value.code == "ITEM_NOT_FOUND"
