"""
Report models

Serializable description of a single list/list-all entry. Validation and
JSON encoding are handled by pydantic.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, TypeAdapter


class ItemStatus(str, Enum):
    """Whether a listed directive would be removed now or only later"""
    READY = "Ready"
    PENDING = "Pending"


class ListItem(BaseModel):
    """
    One reported removal candidate

    Attributes:
        line_range: First and last 1-based source line touched, if known
        annotated_code_block: Excerpt with start/end markers (uncolored)
        current_status: READY or PENDING
    """
    line_range: Optional[Tuple[int, int]] = None
    annotated_code_block: str
    current_status: ItemStatus


ListItems = TypeAdapter(List[ListItem])
