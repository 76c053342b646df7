"""Persistent application data stored as a small JSON file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass

from .utils import get_data_path


@dataclass
class AppData:
    """Settings kept between runs."""

    user_id: str = ""

    def to_json(self) -> str:
        return json.dumps({"userId": self.user_id}, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> AppData:
        payload = json.loads(text)
        if not isinstance(payload, dict):
            raise ValueError("application data must be a JSON object")
        user_id = payload.get("userId")
        if user_id is None:
            user_id = ""
        if not isinstance(user_id, str):
            raise ValueError("userId must be a string")
        return cls(user_id=user_id)


class DataManager:
    """Reads and writes the application data file."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = os.fspath(path) if path is not None else os.path.join(
            get_data_path(), "data.json"
        )

    def file_check(self) -> None:
        """Create the data file with empty data if it does not exist."""
        if not os.path.exists(self.path):
            self.set_data(AppData())

    def get_data(self) -> AppData:
        self.file_check()
        with open(self.path, "rb") as handle:
            return AppData.from_json(handle.read())

    def set_data(self, data: AppData) -> None:
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write(data.to_json())

    def get_user_id(self) -> str:
        return self.get_data().user_id

    def set_user_id(self, user_id: str) -> None:
        data = self.get_data()
        data.user_id = user_id
        self.set_data(data)