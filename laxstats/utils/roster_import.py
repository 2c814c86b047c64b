"""
Roster import helpers
Parses pasted roster text of the form "Number, Name, Position" (one player
per line, positions joined with '/') into player entries.
"""

from typing import Any, Dict, List, Optional
from laxstats.constants import DEFAULT_POSITION, POSITIONS
import logging

logger = logging.getLogger(__name__)


def parse_roster_line(line: str) -> Optional[Dict[str, Any]]:
    """
    Parse one roster line

    Returns:
        Entry with name, number and position, or None if the line has no
        numeric jersey or no name
    """
    parts = [part.strip() for part in line.split(',')]
    if len(parts) < 2:
        return None

    try:
        number = int(parts[0])
    except ValueError:
        return None

    name = parts[1]
    if not name:
        return None

    position_text = parts[2] if len(parts) > 2 and parts[2] else DEFAULT_POSITION
    # unknown roles are dropped; a line with none left plays midfield
    positions = [p.strip() for p in position_text.split('/') if p.strip() in POSITIONS]

    return {
        'name': name,
        'number': number,
        'position': positions or [DEFAULT_POSITION],
    }


def parse_roster_text(text: str) -> List[Dict[str, Any]]:
    """Entries for every valid line of the text; blank and malformed lines are skipped"""
    entries = []
    for line_number, line in enumerate((text or '').splitlines(), start=1):
        if not line.strip():
            continue
        entry = parse_roster_line(line)
        if entry is None:
            logger.debug(f"Skipping roster line {line_number}: {line!r}")
            continue
        entries.append(entry)
    return entries


def numbered_entries(start: int, end: int) -> List[Dict[str, Any]]:
    """Placeholder players '#start' .. '#end' for an opponent known only by jersey numbers"""
    return [
        {'name': f'#{number}', 'number': number, 'position': [DEFAULT_POSITION]}
        for number in range(start, end + 1)
    ]
