"""Custom exceptions for the edu-echo backend."""


class PipelineError(Exception):
    """Base class for failures raised by an audio pipeline stage."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class UploadError(PipelineError):
    """Raised when an upload is missing or unusable."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class UploadTooLargeError(UploadError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Audio file is {size} bytes, limit is {limit} bytes")


class TranscodeError(PipelineError):
    """Raised when converting the uploaded audio to WAV fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        super().__init__(f"Failed to convert audio file '{file_name}'", cause)


class StorageWriteError(PipelineError):
    """Raised when uploading an object to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to upload '{object_name}' to storage", cause)


class StorageReadError(PipelineError):
    """Raised when reading an object from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to download '{object_name}' from storage", cause)


class ExistenceTimeoutError(PipelineError):
    """Raised when an uploaded object never became visible in storage."""

    def __init__(self, uri: str, attempts: int):
        self.uri = uri
        self.attempts = attempts
        super().__init__(
            f"File {uri} does not exist in storage after {attempts} checks"
        )


class DecodeError(PipelineError):
    """Raised when an audio buffer cannot be decoded."""

    def __init__(self, cause: Exception | None = None):
        super().__init__("Failed to compute audio duration", cause)


class DurationExceededError(PipelineError):
    """Raised when audio is longer than the processing ceiling."""

    def __init__(self, duration: float, limit: float):
        self.duration = duration
        self.limit = limit
        super().__init__(
            f"Audio is too long to be processed ({duration:.0f}s > {limit:.0f}s)"
        )


class RecognitionError(PipelineError):
    """Raised when the speech-to-text job fails or never completes."""

    def __init__(self, uri: str, reason: str, cause: Exception | None = None):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Failed to transcribe '{uri}': {reason}", cause)


class EmptyTranscriptError(PipelineError):
    """Raised when a transcript has nothing that can be summarized."""

    def __init__(self):
        super().__init__(
            "Transcription is empty or not understandable. No summary generated."
        )


class GenerationError(PipelineError):
    """Raised when the text generation backend fails or returns unusable output."""


class InsufficientContentError(PipelineError):
    """Raised when quiz source content is too short to generate from."""

    def __init__(self, length: int, minimum: int):
        self.length = length
        self.minimum = minimum
        super().__init__("Content is not detailed enough.")


class MissingMaterialError(PipelineError):
    """Raised when no study material was supplied for flashcard generation."""

    def __init__(self):
        super().__init__("No text was provided for flashcard generation.")


class PersistenceError(PipelineError):
    """Raised when a database write or read fails."""

    def __init__(self, entity: str, cause: Exception | None = None):
        self.entity = entity
        super().__init__(f"Failed to persist {entity}", cause)


class UserNotFoundError(PipelineError):
    """Raised when the owning user of a request does not exist."""

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__("User not found")


class CacheServiceError(Exception):
    """Raised when cache operations fail."""

    def __init__(self, key: str, operation: str, cause: Exception | None = None):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"Cache {operation} failed for key '{key}'")
