"""
Tests for JsonFileSubmissionRepository.

Covers:
- Collection files created as empty JSON arrays
- Append / list (newest first) / find / delete
- Email uniqueness re-checked under the collection lock
- Atomic writes (no leftover .tmp, original intact on failure)
- Corrupt files reported as StorageError
- Concurrent appends of the same email store exactly one record
"""

import json
import threading
from unittest.mock import patch

import pytest

from src.domain.shared.exceptions import DuplicateSubmissionError
from src.domain.signup.entities import (
    CustomerSubmission,
    MerchantSubmission,
    SubmissionKind,
)
from src.infrastructure.exceptions import StorageError
from src.infrastructure.persistence.json_file import JsonFileSubmissionRepository


@pytest.fixture
def repository(tmp_path):
    return JsonFileSubmissionRepository(data_dir=str(tmp_path))


def make_customer(email="jo@example.com", name="Jo Lin"):
    return CustomerSubmission(name=name, email=email, style="minimalist", budget="100-250")


# ============================================================================
# INITIALIZATION
# ============================================================================


def test_init_creates_empty_collections(tmp_path):
    data_dir = tmp_path / "nested" / "data"

    JsonFileSubmissionRepository(data_dir=str(data_dir))

    assert json.loads((data_dir / "customers.json").read_text()) == []
    assert json.loads((data_dir / "merchants.json").read_text()) == []


def test_init_keeps_existing_records(tmp_path):
    record = make_customer()
    (tmp_path / "customers.json").write_text(json.dumps([record.to_dict()]))

    repository = JsonFileSubmissionRepository(data_dir=str(tmp_path))

    assert repository.list_all(SubmissionKind.CUSTOMER) == [record]


# ============================================================================
# APPEND / LIST / FIND
# ============================================================================


def test_append_persists_record(repository, tmp_path):
    record = make_customer()

    repository.append(SubmissionKind.CUSTOMER, record)

    stored = json.loads((tmp_path / "customers.json").read_text())
    assert stored == [record.to_dict()]
    assert not (tmp_path / "customers.json.tmp").exists()


def test_list_all_returns_newest_first(repository):
    first = make_customer("a@x.io", "A")
    second = make_customer("b@x.io", "B")
    third = make_customer("c@x.io", "C")
    for record in (first, second, third):
        repository.append(SubmissionKind.CUSTOMER, record)

    assert [r.name for r in repository.list_all(SubmissionKind.CUSTOMER)] == ["C", "B", "A"]


def test_collections_are_independent(repository):
    repository.append(SubmissionKind.CUSTOMER, make_customer("shared@x.io"))
    merchant = MerchantSubmission(
        business_name="Shared Ltd", contact_name="Sam", email="shared@x.io", category="other"
    )

    repository.append(SubmissionKind.MERCHANT, merchant)

    assert repository.list_all(SubmissionKind.MERCHANT) == [merchant]
    assert len(repository.list_all(SubmissionKind.CUSTOMER)) == 1


def test_append_duplicate_email_raises_and_leaves_file_unchanged(repository, tmp_path):
    repository.append(SubmissionKind.CUSTOMER, make_customer())
    before = (tmp_path / "customers.json").read_text()

    with pytest.raises(DuplicateSubmissionError) as exc_info:
        repository.append(SubmissionKind.CUSTOMER, make_customer(name="Someone Else"))

    assert exc_info.value.collection == "customers"
    assert (tmp_path / "customers.json").read_text() == before


def test_find_by_email(repository):
    record = make_customer()
    repository.append(SubmissionKind.CUSTOMER, record)

    assert repository.find_by_email(SubmissionKind.CUSTOMER, "jo@example.com") == record
    assert repository.find_by_email(SubmissionKind.CUSTOMER, "nobody@example.com") is None
    assert repository.find_by_email(SubmissionKind.MERCHANT, "jo@example.com") is None


# ============================================================================
# DELETE
# ============================================================================


def test_delete_by_id_removes_only_that_record(repository):
    keep = make_customer("keep@x.io")
    drop = make_customer("drop@x.io")
    repository.append(SubmissionKind.CUSTOMER, keep)
    repository.append(SubmissionKind.CUSTOMER, drop)

    assert repository.delete_by_id(SubmissionKind.CUSTOMER, drop.id) is True
    assert repository.list_all(SubmissionKind.CUSTOMER) == [keep]


def test_delete_by_id_unknown_returns_false(repository, tmp_path):
    repository.append(SubmissionKind.CUSTOMER, make_customer())
    before = (tmp_path / "customers.json").read_text()

    assert repository.delete_by_id(SubmissionKind.CUSTOMER, "no-such-id") is False
    assert (tmp_path / "customers.json").read_text() == before


def test_delete_frees_email_for_new_signup(repository):
    record = make_customer()
    repository.append(SubmissionKind.CUSTOMER, record)
    repository.delete_by_id(SubmissionKind.CUSTOMER, record.id)

    repository.append(SubmissionKind.CUSTOMER, make_customer())

    assert len(repository.list_all(SubmissionKind.CUSTOMER)) == 1


# ============================================================================
# FAILURES
# ============================================================================


def test_corrupt_json_is_storage_error(repository, tmp_path):
    (tmp_path / "customers.json").write_text("{not json")

    with pytest.raises(StorageError):
        repository.list_all(SubmissionKind.CUSTOMER)


def test_non_array_json_is_storage_error(repository, tmp_path):
    (tmp_path / "merchants.json").write_text('{"id": "x"}')

    with pytest.raises(StorageError):
        repository.list_all(SubmissionKind.MERCHANT)


def test_failed_write_keeps_original_file(repository, tmp_path):
    original = make_customer()
    repository.append(SubmissionKind.CUSTOMER, original)

    with patch(
        "src.infrastructure.persistence.json_file.submission_repository.os.replace",
        side_effect=OSError(28, "No space left on device"),
    ):
        with pytest.raises(StorageError):
            repository.append(SubmissionKind.CUSTOMER, make_customer("new@x.io"))

    assert repository.list_all(SubmissionKind.CUSTOMER) == [original]
    assert not (tmp_path / "customers.json.tmp").exists()


def test_ping(repository, tmp_path):
    assert repository.ping() is True


# ============================================================================
# CONCURRENCY
# ============================================================================


def test_concurrent_appends_with_same_email_store_one_record(repository):
    outcomes = []
    barrier = threading.Barrier(8)

    def submit(index):
        barrier.wait()
        try:
            repository.append(SubmissionKind.CUSTOMER, make_customer(name=f"Racer {index}"))
            outcomes.append("stored")
        except DuplicateSubmissionError:
            outcomes.append("duplicate")

    threads = [threading.Thread(target=submit, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("stored") == 1
    assert outcomes.count("duplicate") == 7
    assert len(repository.list_all(SubmissionKind.CUSTOMER)) == 1


def test_concurrent_appends_with_distinct_emails_lose_nothing(repository):
    threads = [
        threading.Thread(
            target=repository.append,
            args=(SubmissionKind.CUSTOMER, make_customer(f"user{i}@x.io", f"User {i}")),
        )
        for i in range(20)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(repository.list_all(SubmissionKind.CUSTOMER)) == 20
