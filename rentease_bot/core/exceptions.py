class CompletionUnavailable(Exception):
    """
    Raised by the completion client when the language model could not produce
    a reply for this turn (network error, non-success status, timeout, missing
    credentials or an empty payload).
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
