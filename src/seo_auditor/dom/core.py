from typing import List, Optional
from pydantic import BaseModel, Field

# Handle of the synthetic root node in every HTMLTree arena.
ROOT_ID = 0


class Node(BaseModel):
    """
    A single parsed tag instance in the simplified tree.

    Nodes live in an arena (see HTMLTree) and refer to each other by id:
    `children` holds the owned child handles in document order, `parent_id`
    is a non-owning back-reference. Only the synthetic root has no parent.
    """
    id: int
    name: str = ""
    content: str = ""
    parent_id: Optional[int] = None
    children: List[int] = Field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
