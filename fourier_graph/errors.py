"""Exception types raised by the fourier_graph package."""


class FourierGraphError(Exception):
    """Base class for fourier_graph errors"""
    pass


class InvalidImageBufferError(FourierGraphError):
    """Raised when input pixels cannot be interpreted as an image"""
    pass


class SpectrumExportError(FourierGraphError):
    """Errors related to spectrum export files"""
    pass
