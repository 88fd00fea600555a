"""
Error types raised by the converter
"""


class ConversionError(Exception):
    """A resource matched a processor but could not be converted to its typed form"""

    def __init__(self, reason: str, resource: str = None):
        self.reason = reason
        self.resource = resource

    def __str__(self):
        if self.resource is None:
            return self.reason
        return f"{self.resource}: {self.reason}"
