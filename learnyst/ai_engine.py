"""
Learnyst — AI Engine
=====================
Multi-key failover around the generative-text providers (Gemini + Groq).

Features:
  - Ordered credential list (GEMINI_API_KEY_1..5, optional Groq key last)
  - Unconfigured credentials skipped without touching the retry budget
  - Quota / overload errors burn the credential, other errors burn a retry
  - Iterative loop with an explicit outcome, no recursive retries
"""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

import google.generativeai as genai
import groq
from google.ai import generativelanguage as glm
from google.api_core import exceptions as google_exceptions
from groq import AsyncGroq

from learnyst.core.exceptions import (
    AllCredentialsExhausted,
    CredentialNotConfigured,
    NoCredentialsAvailable,
    QuotaOrOverloadError,
    TransientError,
)

logger = logging.getLogger(__name__)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CREDENTIALS + GENERATION POLICY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class Credential:
    """One API key for one provider. List position is its priority."""
    identifier: str
    api_key: Optional[str] = field(default=None, repr=False)
    provider: str = "gemini"
    model: str = "gemini-1.5-flash"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def require_key(self) -> str:
        if not self.is_configured:
            raise CredentialNotConfigured(f"{self.identifier} has no API key")
        return self.api_key.strip()


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters sent with every call. Never taken from requests."""
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 4000
    request_timeout: float = 120.0

    @classmethod
    def from_settings(cls, settings) -> "GenerationConfig":
        return cls(
            temperature=settings.GENERATION_TEMPERATURE,
            top_k=settings.GENERATION_TOP_K,
            top_p=settings.GENERATION_TOP_P,
            max_output_tokens=settings.GENERATION_MAX_OUTPUT_TOKENS,
            request_timeout=settings.AI_TIMEOUT_SECONDS,
        )


def build_credentials(settings) -> List[Credential]:
    """Ordered credential list for the configured AI_PROVIDER mode."""
    gemini = [
        Credential(
            identifier=f"GEMINI_API_KEY_{index}",
            api_key=key,
            provider="gemini",
            model=settings.GEMINI_MODEL,
        )
        for index, key in enumerate(settings.gemini_api_keys, start=1)
    ]
    groq_key = Credential(
        identifier="GROQ_API_KEY",
        api_key=settings.GROQ_API_KEY,
        provider="groq",
        model=settings.GROQ_MODEL,
    )

    if settings.AI_PROVIDER == "groq":
        return [groq_key]
    if settings.AI_PROVIDER == "hybrid":
        return gemini + [groq_key]
    return gemini


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PROVIDER CALLS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Backend = Callable[[Credential, str, GenerationConfig], Awaitable[str]]

# One REST client per key. genai.configure() would set a single key for the
# whole process, so each credential carries its own client instead.
_gemini_clients: Dict[str, glm.GenerativeServiceClient] = {}
_gemini_clients_lock = threading.Lock()


def _gemini_client(api_key: str) -> glm.GenerativeServiceClient:
    with _gemini_clients_lock:
        client = _gemini_clients.get(api_key)
        if client is None:
            client = glm.GenerativeServiceClient(transport="rest", client_options={"api_key": api_key})
            _gemini_clients[api_key] = client
        return client


def _gemini_generate(api_key: str, model_name: str, prompt: str, config: GenerationConfig) -> str:
    request = genai.protos.GenerateContentRequest(
        model=f"models/{model_name}",
        contents=[genai.protos.Content(role="user", parts=[genai.protos.Part(text=prompt)])],
        generation_config=genai.protos.GenerationConfig(
            temperature=config.temperature,
            top_k=config.top_k,
            top_p=config.top_p,
            max_output_tokens=config.max_output_tokens,
        ),
    )
    # the timeout also bounds the worker thread once the caller gives up
    response = _gemini_client(api_key).generate_content(request=request, timeout=config.request_timeout)
    if not response.candidates:
        return ""
    return "".join(part.text for part in response.candidates[0].content.parts)


async def call_gemini(credential: Credential, prompt: str, config: GenerationConfig) -> str:
    """Call Gemini with one specific key."""
    api_key = credential.require_key()
    logger.info(f"[AI‑ENGINE] Calling Gemini ({credential.model}) with {credential.identifier}...")
    return await asyncio.to_thread(_gemini_generate, api_key, credential.model, prompt, config)


async def call_groq(credential: Credential, prompt: str, config: GenerationConfig) -> str:
    """Call Groq (Llama 3) with one specific key."""
    api_key = credential.require_key()
    logger.info(f"[AI‑ENGINE] Calling Groq ({credential.model}) with {credential.identifier}...")
    client = AsyncGroq(api_key=api_key, timeout=config.request_timeout)
    try:
        completion = await client.chat.completions.create(
            model=credential.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_output_tokens,
        )
    finally:
        await client.close()
    return completion.choices[0].message.content or ""


DEFAULT_BACKENDS: Dict[str, Backend] = {
    "gemini": call_gemini,
    "groq": call_groq,
}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ERROR CLASSIFICATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_QUOTA_EXCEPTIONS = (
    google_exceptions.ResourceExhausted,
    google_exceptions.TooManyRequests,
    google_exceptions.ServiceUnavailable,
    groq.RateLimitError,
)

_QUOTA_MARKERS = ("429", "quota", "exceeded", "rate limit", "503", "overloaded")


def classify_error(exc: BaseException) -> type:
    """Return QuotaOrOverloadError or TransientError for a backend failure."""
    if isinstance(exc, QuotaOrOverloadError):
        return QuotaOrOverloadError
    if isinstance(exc, TransientError):
        return TransientError
    if isinstance(exc, _QUOTA_EXCEPTIONS):
        return QuotaOrOverloadError
    if getattr(exc, "status_code", None) in (429, 503):
        return QuotaOrOverloadError

    message = str(exc).lower()
    if any(marker in message for marker in _QUOTA_MARKERS):
        return QuotaOrOverloadError
    return TransientError


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# FAILOVER ENGINE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
    NO_CREDENTIALS = "no_credentials"


@dataclass
class GenerationOutcome:
    """Terminal result of one engine run. ``attempts`` lists every call made."""
    status: OutcomeStatus
    text: Optional[str] = None
    error: Optional[BaseException] = None
    attempts: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS


class FailoverEngine:
    """
    Runs one prompt against an ordered credential list.

    Quota/overload errors move straight to the next credential. Any other
    error sleeps ``retry_delay`` and retries the same credential until
    ``max_retries`` is spent, then moves on.
    """

    def __init__(
        self,
        credentials: Sequence[Credential],
        backends: Optional[Dict[str, Backend]] = None,
        config: Optional[GenerationConfig] = None,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.credentials = list(credentials)
        self.backends = dict(backends or DEFAULT_BACKENDS)
        self.config = config or GenerationConfig()
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings, backends: Optional[Dict[str, Backend]] = None) -> "FailoverEngine":
        engine = cls(
            credentials=build_credentials(settings),
            backends=backends,
            config=GenerationConfig.from_settings(settings),
            max_retries=settings.MAX_RETRIES_PER_CREDENTIAL,
            retry_delay=settings.RETRY_DELAY_SECONDS,
        )
        logger.info(
            f"[AI‑ENGINE] Provider mode: {settings.AI_PROVIDER}, "
            f"{engine.configured_count}/{len(engine.credentials)} credentials configured"
        )
        return engine

    def _usable(self, credential: Credential) -> bool:
        return credential.is_configured and credential.provider in self.backends

    @property
    def configured_count(self) -> int:
        return sum(1 for c in self.credentials if self._usable(c))

    @property
    def has_credentials(self) -> bool:
        return self.configured_count > 0

    async def _invoke(self, credential: Credential, prompt: str) -> str:
        backend = self.backends[credential.provider]
        text = await backend(credential, prompt, self.config)
        if not text or not text.strip():
            raise TransientError("Empty AI response received")
        return text

    async def run(self, prompt: str, max_retries: Optional[int] = None) -> GenerationOutcome:
        """Try every usable credential in order and report how it ended."""
        budget = self.max_retries if max_retries is None else max_retries
        attempts: List[str] = []
        last_error: Optional[BaseException] = None
        last_was_quota = False

        for credential in self.credentials:
            if not self._usable(credential):
                logger.info(f"[FAILOVER] {credential.identifier} not configured, skipping...")
                continue

            retries_left = budget
            while True:
                attempts.append(credential.identifier)
                try:
                    text = await self._invoke(credential, prompt)
                except Exception as e:
                    last_error = e
                    last_was_quota = classify_error(e) is QuotaOrOverloadError
                    if last_was_quota:
                        logger.warning(
                            f"[FAILOVER] {credential.identifier} quota exceeded or overloaded, "
                            f"trying next key..."
                        )
                        break
                    if retries_left > 0:
                        retries_left -= 1
                        logger.warning(
                            f"[FAILOVER] {credential.identifier} failed: {str(e)[:200]}. "
                            f"Retrying in {self.retry_delay}s ({retries_left} retries left)..."
                        )
                        await self._sleep(self.retry_delay)
                        continue
                    logger.warning(
                        f"[FAILOVER] {credential.identifier} out of retries: {str(e)[:200]}. "
                        f"Trying next key..."
                    )
                    break
                else:
                    logger.info(f"[FAILOVER] ✓ Success with {credential.identifier}")
                    return GenerationOutcome(OutcomeStatus.SUCCESS, text=text, attempts=attempts)

        if not attempts:
            logger.warning("[FAILOVER] ✗ No API keys configured")
            return GenerationOutcome(OutcomeStatus.NO_CREDENTIALS)
        if last_was_quota:
            logger.error("[FAILOVER] ✗ All API keys exceeded their quota or are overloaded")
            return GenerationOutcome(OutcomeStatus.EXHAUSTED, error=last_error, attempts=attempts)
        logger.error(f"[FAILOVER] ✗ All API keys failed. Last error: {last_error}")
        return GenerationOutcome(OutcomeStatus.FAILED, error=last_error, attempts=attempts)

    async def generate(self, prompt: str, max_retries: Optional[int] = None) -> str:
        """Return generated text or raise the terminal failure."""
        outcome = await self.run(prompt, max_retries=max_retries)
        if outcome.ok:
            return outcome.text
        if outcome.status is OutcomeStatus.NO_CREDENTIALS:
            raise NoCredentialsAvailable("No valid API keys available")
        if outcome.status is OutcomeStatus.EXHAUSTED:
            raise AllCredentialsExhausted(
                "All API keys have exceeded their quota limits or are overloaded"
            ) from outcome.error
        raise outcome.error
