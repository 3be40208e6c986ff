"""List Query Builders - Filter, sort and pagination translation (SoC)"""
import re
from typing import Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from campus.config.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

# ═══════════════════════════════════════════════════════════════════════════════
# SHARED PIECES
# ═══════════════════════════════════════════════════════════════════════════════


def contains_match(value: str) -> Dict:
    """Case-insensitive substring match, value taken literally"""
    return {"$regex": re.escape(value), "$options": "i"}


def prefix_match(value: str) -> Dict:
    """Case-insensitive match at the start of the field"""
    return {"$regex": f"^{re.escape(value)}", "$options": "i"}


def range_match(minimum: Optional[int], maximum: Optional[int]) -> Optional[Dict]:
    """Single $gte/$lte document, None when neither bound is given"""
    if minimum is None and maximum is None:
        return None
    bounds = {}
    if minimum is not None:
        bounds["$gte"] = minimum
    if maximum is not None:
        bounds["$lte"] = maximum
    return bounds


def build_sort(options: Dict) -> Optional[List[Tuple[str, int]]]:
    sort_by = options.get("sort_by")
    # Operator names are not fields, such a sort is dropped
    if not sort_by or sort_by.startswith("$"):
        return None
    field = "_id" if sort_by == "id" else sort_by
    order = DESCENDING if options.get("sort_order") == "DESC" else ASCENDING
    return [(field, order)]


def clamp_pagination(options: Dict) -> Tuple[int, int]:
    """Return (skip, limit); limit never exceeds MAX_PAGE_LIMIT"""
    limit = options.get("limit")
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        limit = DEFAULT_PAGE_LIMIT
    limit = min(limit, MAX_PAGE_LIMIT)

    offset = options.get("offset")
    if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
        offset = 0

    return offset, limit


def _assemble(query: Dict, options: Optional[Dict]) -> Dict:
    options = options or {}
    skip, limit = clamp_pagination(options)
    return {
        "filter": query,
        "sort": build_sort(options),
        "skip": skip,
        "limit": limit,
    }

# ═══════════════════════════════════════════════════════════════════════════════
# COLLECTION QUERIES
# ═══════════════════════════════════════════════════════════════════════════════


def build_student_query(filters: Optional[Dict] = None, options: Optional[Dict] = None) -> Dict:
    """Translate a StudentFilter + ListOptions into a students query"""
    filters = filters or {}
    query = {}

    if filters.get("major"):
        query["major"] = filters["major"]
    if filters.get("name_contains"):
        query["name"] = contains_match(filters["name_contains"])
    if filters.get("email_contains"):
        query["email"] = contains_match(filters["email_contains"])

    age = range_match(filters.get("min_age"), filters.get("max_age"))
    if age:
        query["age"] = age

    return _assemble(query, options)


def build_course_query(filters: Optional[Dict] = None, options: Optional[Dict] = None) -> Dict:
    """Translate a CourseFilter + ListOptions into a courses query"""
    filters = filters or {}
    query = {}

    if filters.get("title_contains"):
        query["title"] = contains_match(filters["title_contains"])
    if filters.get("code_prefix"):
        query["code"] = prefix_match(filters["code_prefix"])
    if filters.get("instructor"):
        query["instructor"] = filters["instructor"]

    credits = range_match(filters.get("min_credits"), filters.get("max_credits"))
    if credits:
        query["credits"] = credits

    return _assemble(query, options)
