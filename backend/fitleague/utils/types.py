from enum import Enum
from typing import Any


class EnumAutoStr(Enum):
    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, last_values: list[Any]) -> str:
        return name

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
