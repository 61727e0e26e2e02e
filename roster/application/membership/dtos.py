"""
Data Transfer Objects for the membership application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ListEntitiesQuery:
    """Input DTO for a paginated list request.

    Attributes:
        page_size: Maximum number of items on the page. Defaults to 0.
        offset: Number of items to skip. Defaults to 0.
    """

    page_size: int = 0
    offset: int = 0
