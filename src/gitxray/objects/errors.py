"""Exceptions raised while decoding loose objects."""


class ObjectDecodeError(Exception):
	"""Base exception for a loose object that could not be decoded."""


class CorruptObjectError(ObjectDecodeError):
	"""Raised when the object file is not valid zlib data."""


class InvalidFormatError(ObjectDecodeError):
	"""Raised when the decompressed buffer lacks a `<type> <size>\\0` header."""
