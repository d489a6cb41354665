"""
Custom Exception Classes

The engine itself never raises for well-formed input; these are raised at the
boundary where raw records are validated before analysis.
"""


class AnalyticsException(Exception):
    """Base exception for all analytics-related errors"""
    pass


class InvalidRecordError(AnalyticsException):
    """Raised when a raw habit or event record fails validation"""
    def __init__(self, record_type: str, index: int, messages: dict):
        self.record_type = record_type
        self.index = index
        self.messages = messages
        fields = ', '.join(sorted(messages)) if messages else 'unknown'
        super().__init__(
            f"Invalid {record_type} record at index {index}: {fields}"
        )
