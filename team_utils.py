from __future__ import annotations

import re
from typing import Mapping, Optional

from keeper.keeper_models import Team


def _slug(s: str) -> str:
    # Normalize to a comparison key: alnum only, lowercase.
    return re.sub(r"[^a-z0-9]+", "", (s or "").strip().lower())


def normalize_team_id(team_token: str, teams: Mapping[str, Team]) -> Optional[str]:
    """Normalize any team identifier to the league's canonical team id.

    Accepts:
      - Team id: "nyk" / "NYK"
      - Abbreviation: "NYK"
      - Franchise name: "Knickerbockers"
      - Display forms: "Knickerbockers (NYK)", "NYK - Knickerbockers"

    Returns None if it can't be resolved.
    """
    raw = str(team_token or "").strip()
    if not raw:
        return None

    # 1) Direct id match, then case-insensitive id/abbrev match
    if raw in teams:
        return raw
    upper = raw.upper()
    for team_id, team in teams.items():
        if team_id.upper() == upper or (team.abbrev and team.abbrev.upper() == upper):
            return team_id

    # 2) Trailing (ABBR) or [ABBR]
    m = re.search(r"[\(\[]([A-Za-z0-9_]{2,5})[\)\]]\s*$", raw)
    if m:
        found = normalize_team_id(m.group(1), teams)
        if found:
            return found

    # 3) Dash forms like "NYK - Knickerbockers" or "Knickerbockers - NYK"
    parts = [p.strip() for p in re.split(r"\s*[\-–—]\s*", raw) if p.strip()]
    if len(parts) >= 2:
        for cand in (parts[0], parts[-1]):
            found = normalize_team_id(cand, teams)
            if found:
                return found

    # 4) Franchise name (punctuation/whitespace-insensitive)
    target = _slug(raw)
    if target:
        for team_id, team in teams.items():
            if team.name and _slug(team.name) == target:
                return team_id

    return None
