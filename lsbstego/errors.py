class StegoError(Exception):
    """Base class for steganography-related exceptions."""
    pass


class InsufficientCapacityError(StegoError):
    """Carrier too small for header + payload"""
    def __init__(self, required, available):
        self.required = required
        self.available = available
        super().__init__(f"Need {required} bits, have {available} bits")


class InvalidLengthError(StegoError):
    """Decoded length header cannot fit in the carrier"""
    def __init__(self, length, available):
        self.length = length
        self.available = available
        if length is None:
            super().__init__(f"Carrier of {available} bits cannot hold a 32-bit length header")
        else:
            super().__init__(f"Decoded length {length} bytes exceeds carrier capacity of {available} bits")


class IOFailure(StegoError):
    """A collaborator could not read or write a file."""
    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"{self.path}: {self.reason}")


class CarrierLoadError(IOFailure):
    pass


class SecretReadError(IOFailure):
    pass


class OutputWriteError(IOFailure):
    pass


class UnsupportedFormatError(StegoError):
    """Image format would not preserve the LSB plane"""
    def __init__(self, format_found, message=""):
        self.format_found = format_found
        self.message = message or f"Unsupported image format: {format_found}"
        super().__init__(self.message)
