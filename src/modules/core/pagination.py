"""Shared pagination for list endpoints."""

from __future__ import annotations

from django.conf import settings
from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination with a client-tunable ``page_size``.

    Works on plain lists as well as querysets, so services may hand back
    already-projected DTO lists.
    """

    page_size = settings.REST_FRAMEWORK.get("PAGE_SIZE", 20)
    page_size_query_param = "page_size"
    max_page_size = 100
