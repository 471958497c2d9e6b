# /seatwise/services/seating_helpers/grid.py

"""
The classroom grid: an R x C array of seats, row-major, with row 0 at the
front of the room. Pure functions only.
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ...models.seating_model import ClassroomLayout, SeatAssignment, SeatPosition


def capacity(layout: ClassroomLayout) -> int:
    return layout.rows * layout.cols

def is_in_bounds(layout: ClassroomLayout, row: int, col: int) -> bool:
    return 0 <= row < layout.rows and 0 <= col < layout.cols

def seat_index(layout: ClassroomLayout, row: int, col: int) -> int:
    """Row-major position of a seat, i.e. the order the fallback fills seats in."""
    return row * layout.cols + col

def iter_seats(layout: ClassroomLayout) -> Iterator[Tuple[int, int]]:
    for row in range(layout.rows):
        for col in range(layout.cols):
            yield row, col

def build_seat_grid(
    layout: ClassroomLayout,
    assignments: List[SeatAssignment],
    name_lookup: Optional[Callable[[str], Optional[str]]] = None
) -> List[SeatPosition]:
    """
    Lays the assignments onto the full grid for presentation. Every seat gets
    exactly one SeatPosition; seats nobody was assigned to carry no student.
    Assignments outside the grid are ignored.
    """
    occupied: Dict[Tuple[int, int], SeatAssignment] = {
        (a.row, a.col): a for a in assignments if is_in_bounds(layout, a.row, a.col)
    }
    positions = []
    for row, col in iter_seats(layout):
        assignment = occupied.get((row, col))
        if assignment is None:
            positions.append(SeatPosition(row=row, col=col))
            continue
        name = name_lookup(assignment.studentId) if name_lookup else None
        positions.append(SeatPosition(
            row=row,
            col=col,
            studentId=assignment.studentId,
            studentName=name
        ))
    return positions
