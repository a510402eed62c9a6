"""
Module: header

Purpose:
    Pool-level metadata shown on every generated paper: title, the labels
    printed in front of a recipient's name and id, per-category labels and
    the notice text. Passed through to renderers verbatim.

Key Classes:
    - PoolHeader: Immutable pool metadata
"""

from __future__ import annotations

from dataclasses import dataclass

from .questions import Category

DEFAULT_NOTICE = """Notice:
* All the questions should be considered, understood and interpreted in the context of the course you learned. Otherwise, the questions may or may not make sense.
* Type A: Multiple Choice 1 - you have to choose one answer from the list.
    # If your answer is correct, you will get 3 points.
    # If your answer is incorrect, you will lose 1 point.
    # If you choose nothing from the list, you will get 0 points.
* Type B: Multiple Choice 2 - you have to choose two answers from the list.
    # If both answers that you chose are correct, you will get 3 points.
    # If one answer you chose is correct and the other one you chose is incorrect, you will get 0 points.
    # If both answers that you chose are incorrect, you will lose 3 points.
    # If you choose one answer or nothing from the list, you will get 0 points."""


@dataclass(frozen=True)
class PoolHeader:
    """
    Pool metadata (immutable).

    Attributes:
        title: Paper title
        name: Label printed before the recipient's name
        id: Label printed before the recipient's identifier
        categories: Category labels, index = category - 1
        notice: Free text printed under the title
    """

    title: str = ""
    name: str = ""
    id: str = ""
    categories: tuple[str, ...] = ()
    notice: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))

    @classmethod
    def default(cls) -> PoolHeader:
        """Header used when a pool ships without one."""
        return cls(
            title="Examination",
            name="Name",
            id="ID",
            categories=("Type A", "Type B"),
            notice=DEFAULT_NOTICE,
        )

    def category_label(self, category: int) -> str:
        """
        Human-readable label for a category.

        Falls back to the category's display name when the header does not
        carry a label for it (typically short-answer questions).
        """
        if 1 <= category <= len(self.categories) and self.categories[category - 1]:
            return self.categories[category - 1]
        return Category(category).display_name

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "name": self.name,
            "id": self.id,
            "categories": list(self.categories),
            "notice": self.notice,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PoolHeader:
        return cls(
            title=data.get("title", ""),
            name=data.get("name", ""),
            id=data.get("id", ""),
            categories=tuple(data.get("categories", ())),
            notice=data.get("notice", ""),
        )
