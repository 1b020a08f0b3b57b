from __future__ import annotations

from typing import Any

from ukpostcodeparser.parser import parse_uk_postcode


def normalise(postcode: Any) -> Any:
    """
    "ec1v9lb" -> "EC1V 9LB". Values that are not valid UK postcodes are
    returned unchanged.
    """
    if not isinstance(postcode, str) or not postcode.strip():
        return postcode
    try:
        outward, inward = parse_uk_postcode(postcode)
    except ValueError:
        return postcode
    return f"{outward} {inward}"
