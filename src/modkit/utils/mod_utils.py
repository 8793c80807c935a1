"""Version comparison and name helpers shared by the index client and installer."""
import re
from itertools import zip_longest
from typing import Optional


def compare_versions(version1: str, version2: str) -> int:
    """Compare semantic versions. Returns 1 if v1>v2, -1 if v1<v2, 0 if equal."""
    if version1 == version2:
        return 0

    def parse_version(v):
        v = str(v).lower().replace('v', '').strip()
        parts = re.findall(r'\d+|[a-z]+', v)
        return [int(p) if p.isdigit() else ord(p[0]) - ord('a') + 1 for p in parts]

    v1_parts = parse_version(version1)
    v2_parts = parse_version(version2)

    for p1, p2 in zip_longest(v1_parts, v2_parts, fillvalue=0):
        if p1 > p2:
            return 1
        elif p1 < p2:
            return -1
    return 0


def split_full_name(full_name: str) -> Optional[tuple]:
    """``author-name-version`` -> (author, name, version), None if malformed."""
    parts = full_name.split('-')
    if len(parts) < 3:
        return None
    return parts[0], parts[1], parts[-1]
