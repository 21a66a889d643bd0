class RelayError(Exception):
    """Base class for errors that abort a relay invocation."""


class InvalidNotificationShapeError(RelayError):
    """Neither testNotification nor subscriptionNotification is present."""


class VerificationClientError(RelayError):
    pass


class VerificationError(RelayError):
    pass


class ForwardRequestError(RelayError):
    pass


class ForwardSendError(RelayError):
    pass
