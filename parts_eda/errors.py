class PartsReportError(Exception):
    """Fatal input problem. The run stops, nothing further is rendered."""


class MissingRelationError(PartsReportError):
    pass


class EmptyResultError(PartsReportError):
    pass


class CardinalityMismatchError(PartsReportError):

    def __init__(self, expected, actual, what='unique companies'):
        self.expected = expected
        self.actual = actual
        super().__init__(f"The dataset does not have exactly {expected} {what} (found {actual}).")
