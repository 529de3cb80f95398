from .api import APIError, SchoolAPIClient
from .presentation import filter_and_sort, medal_for

__all__ = ['APIError', 'SchoolAPIClient', 'filter_and_sort', 'medal_for']
