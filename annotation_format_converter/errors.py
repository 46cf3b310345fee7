class ConversionError(Exception):
    """Base class for everything that aborts a conversion"""


class FormatError(ConversionError):
    """The input is not in the format it was declared as"""


class InvalidPathError(FormatError):
    def __init__(self, path, reason: str):
        super().__init__()
        self.path = path
        self.reason = reason

    def __str__(self):
        return f"{self.path} {self.reason}"


class MalformedDocumentError(FormatError):
    def __init__(self, source, details: str):
        super().__init__()
        self.source = source
        self.details = details

    def __str__(self):
        return f"Couldn't parse {self.source}: {self.details}"


class EmptyDirectoryError(ConversionError):
    def __init__(self, path):
        super().__init__()
        self.path = path

    def __str__(self):
        return f"No .xml annotation files found in the directory {self.path}"


class ImageAccessError(ConversionError):
    """
    Raised when an image referenced by the annotations can't be opened or its dimensions can't be read.
    """

    def __init__(self, path, details: str):
        super().__init__()
        self.path = path
        self.details = details

    def __str__(self):
        return f"Image [{self.path}] couldn't be read: {self.details}"


class DanglingReferenceError(ConversionError):
    def __init__(self, kind: str, referenced_id: int, annotation_id: int):
        super().__init__()
        self.kind = kind
        self.referenced_id = referenced_id
        self.annotation_id = annotation_id

    def __str__(self):
        return f"The {self.kind} with ID[{self.referenced_id}] does not exist (annotation with ID[{self.annotation_id}])"


class WriteError(ConversionError):
    def __init__(self, path, details: str):
        super().__init__()
        self.path = path
        self.details = details

    def __str__(self):
        return f"Couldn't write {self.path}: {self.details}"
