"""
Learnyst — Error Taxonomy
==========================
Everything the generation pipeline can fail with. Only ``InvalidContentKind``
ever reaches an HTTP caller of the content endpoints; the rest are absorbed
into fallback content by ``GenerationService``.
"""


class GenerationError(Exception):
    """Base class for every generation-pipeline failure."""


class CredentialNotConfigured(GenerationError):
    """A backend was handed a credential with no key material."""


class QuotaOrOverloadError(GenerationError):
    """Rate limit, exhausted quota or an overloaded model. Burns the credential."""


class TransientError(GenerationError):
    """Any other backend failure. Burns one retry on the same credential."""


class AllCredentialsExhausted(GenerationError):
    """The last attempted credential failed with a quota/overload error."""


class NoCredentialsAvailable(GenerationError):
    """Not a single credential had key material."""


class MalformedStructuredResponse(GenerationError, ValueError):
    """The backend answered, but no usable JSON could be recovered from it."""


class InvalidContentKind(GenerationError, ValueError):
    """The requested content kind has no prompt template."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Invalid content type: '{kind}'")


# ── Syllabus uploads ─────────────────────────────────────────────────────────

class SyllabusFileRejected(ValueError):
    """Empty, oversized or unsupported upload. Maps to HTTP 400."""


class SyllabusTextNotFound(ValueError):
    """The file was accepted but yielded no text. Maps to HTTP 422."""
