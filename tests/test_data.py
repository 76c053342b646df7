import json

import pytest

from audius_tui.data import AppData, DataManager


@pytest.fixture
def manager(tmp_path):
    return DataManager(tmp_path / "data.json")


def test_missing_file_gives_empty_user_id(manager):
    assert manager.get_user_id() == ""


def test_file_check_creates_compact_json(manager):
    manager.file_check()
    with open(manager.path, encoding="utf-8") as fh:
        assert fh.read() == '{"userId":""}'


def test_file_check_keeps_existing_file(manager):
    manager.set_user_id("abc")
    manager.file_check()
    assert manager.get_user_id() == "abc"


def test_set_and_get_user_id(manager):
    manager.set_user_id("u42")
    assert manager.get_user_id() == "u42"
    with open(manager.path, encoding="utf-8") as fh:
        assert json.load(fh) == {"userId": "u42"}


def test_set_data_round_trip(manager):
    manager.set_data(AppData(user_id="xyz"))
    assert manager.get_data() == AppData(user_id="xyz")


def test_null_user_id_reads_as_empty(manager):
    with open(manager.path, "w", encoding="utf-8") as fh:
        fh.write('{"userId": null}')
    assert manager.get_user_id() == ""


def test_invalid_json_raises(manager):
    with open(manager.path, "w", encoding="utf-8") as fh:
        fh.write("{not json")
    with pytest.raises(ValueError):
        manager.get_data()


def test_non_object_raises(manager):
    with open(manager.path, "w", encoding="utf-8") as fh:
        fh.write("[1, 2]")
    with pytest.raises(ValueError):
        manager.get_user_id()


def test_wrong_user_id_type_raises(manager):
    with open(manager.path, "w", encoding="utf-8") as fh:
        fh.write('{"userId": 5}')
    with pytest.raises(ValueError):
        manager.get_user_id()


def test_missing_directory_raises(tmp_path):
    manager = DataManager(tmp_path / "absent" / "data.json")
    with pytest.raises(OSError):
        manager.get_data()