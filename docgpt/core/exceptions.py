"""
Custom exceptions for DocGPT
"""


class DocGPTException(Exception):
    """Base exception for DocGPT"""
    pass


class NotFoundError(DocGPTException):
    """Resource not found"""

    def __init__(self, resource: str, identifier):
        self.resource = resource
        self.identifier = str(identifier)
        super().__init__(f"{resource.capitalize()} not found: {self.identifier}")


class DuplicateError(DocGPTException):
    """Duplicate resource"""
    pass
