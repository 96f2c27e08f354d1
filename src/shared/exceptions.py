"""Error taxonomy shared by every bounded context.

Domain code raises these; ``shared.api.register_exception_handlers`` turns
them into the ``{success: false, message}`` envelope with the matching status
code.
"""


class StorefrontError(Exception):
    """Base class for all errors the API knows how to answer."""

    status_code = 500

    def __init__(self, message=None):
        self.message = message or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Bad input shape or values.

    Carries a mapping of field name to a list of messages, the same shape
    pydantic and the bulk import row validator produce::

        ValidationError({"quantity": ["Maximum quantity per item is 10"]})
    """

    status_code = 400

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(self._flatten(messages))

    @staticmethod
    def _flatten(messages):
        return "; ".join(msg for field_messages in messages.values() for msg in field_messages)


class NotFound(StorefrontError):
    status_code = 404


class Forbidden(StorefrontError):
    status_code = 403


class AuthenticationError(StorefrontError):
    status_code = 401


class ServerError(StorefrontError):
    status_code = 500
