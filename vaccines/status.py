"""Status enums for vaccine renewal urgency and display categories."""

from enum import Enum


class AttentionLevel(Enum):
    """Urgency of a renewal. Lower value = more urgent."""

    OVERDUE = 1
    WARNING = 2
    NONE = 3


class Status(Enum):
    """Renewal status shown next to each vaccine."""

    OVERDUE = "overdue"
    RENEWS_SOON = "renews-soon"
    VALID = "valid"
    VALID_NO_RENEWAL = "valid-no-renewal"

    @property
    def text(self) -> str:
        return _STATUS_TEXT[self]


_STATUS_TEXT = {
    Status.OVERDUE: "Overdue",
    Status.RENEWS_SOON: "Renews soon",
    Status.VALID: "Valid",
    Status.VALID_NO_RENEWAL: "Valid, no renewal",
}


class Category(Enum):
    """Vaccine category inferred from its name: (keyword, icon, color)."""

    COVID = ("covid", "virus", "purple")
    TBE = ("tbe", "tick", "green")
    INFLUENZA = ("influensa", "lungs", "blue")
    OTHER = (None, "syringe", "gray")

    def __init__(self, keyword, icon, color):
        self.keyword = keyword
        self.icon = icon
        self.color = color

    @classmethod
    def for_name(cls, name: str) -> "Category":
        """Match name against known keywords (case-insensitive substring)."""
        lowered = name.lower()
        for category in cls:
            if category.keyword and category.keyword in lowered:
                return category
        return cls.OTHER
