"""
Custom pagination classes for the API.
"""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """
    Standard pagination class that allows page_size to be set via query parameter.

    Allows clients to request different page sizes using ?page_size=N parameter.
    Default is 50, max is 1000.
    """
    page_size = 50
    page_size_query_param = 'page_size'  # Allow client to set page size
    max_page_size = 1000  # Maximum allowed page size


class OptionalPagination(StandardResultsSetPagination):
    """
    Paginate only on request.

    Lists are returned as plain arrays unless ?page or ?page_size is given.
    """

    def paginate_queryset(self, queryset, request, view=None):
        params = request.query_params
        if self.page_query_param not in params and self.page_size_query_param not in params:
            return None
        return super().paginate_queryset(queryset, request, view)
