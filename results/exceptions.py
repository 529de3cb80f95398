"""
Errors raised by the mark and attendance aggregation functions.

These carry a short machine readable ``code`` so API views can pass it
through to clients unchanged.
"""


class AggregationError(Exception):
    """Base class for invalid input detected during aggregation"""
    code = 'aggregation_error'

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self):
        return self.message


class InvalidMark(AggregationError):
    code = 'InvalidMark'


class InvalidMaxMarks(AggregationError):
    code = 'InvalidMaxMarks'


class InconsistentAttendanceTotals(AggregationError):
    code = 'InconsistentAttendanceTotals'
