"""Summary generation: one retrying pipeline per provider, fanned out concurrently."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Sequence

import httpx

from tubescribe.config import Settings, load_app_config, provider_config
from tubescribe.errors import ConfigurationError, TransientProviderError
from tubescribe.ingestion.export import transcript_to_text, transcript_to_timestamped_text
from tubescribe.models.config import AppConfig, LLMConfig, ProviderConfig
from tubescribe.models.summary import PromptRequest, ProviderKey, SummaryResult, SummaryStyle
from tubescribe.models.transcript import ProcessedTranscript
from tubescribe.summary.prompts import FileTemplateSource, TemplateSource
from tubescribe.summary.providers import AdapterRegistry, ProviderAdapter, default_registry
from tubescribe.summary.validation import raise_for_status, validate_output
from tubescribe.utils.progress import log_error, log_step, log_success, log_warning
from tubescribe.utils.retry import retry_with_backoff


def render_transcript(transcript: ProcessedTranscript | str, style: SummaryStyle) -> str:
    """Transcript text as sent to the model.

    Bullets cite timestamps, so they get the ``[HH:MM:SS]`` rendering.
    """
    if isinstance(transcript, str):
        return transcript
    if style is SummaryStyle.BULLETS:
        return transcript_to_timestamped_text(transcript.segments)
    return transcript_to_text(transcript)


def _redact(url: str) -> str:
    return url.split("?", 1)[0]


class SummaryService:
    """Generates summaries against the configured LLM providers.

    Holds only read-only state, so one instance can serve any number of
    concurrent calls. Provider failures never escape ``generate_summary``;
    they come back as a failed ``SummaryResult``.
    """

    def __init__(
        self,
        settings: Settings,
        registry: AdapterRegistry | None = None,
        *,
        templates: TemplateSource | None = None,
        llm: LLMConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings
        self.registry = registry or default_registry()
        self.templates = templates or FileTemplateSource()
        self.llm = llm or LLMConfig()
        self._client = client
        self._sleep = sleep

    @asynccontextmanager
    async def _client_scope(self, client: httpx.AsyncClient | None = None) -> AsyncIterator[httpx.AsyncClient]:
        if client is not None:
            yield client
        elif self._client is not None:
            yield self._client
        else:
            async with httpx.AsyncClient() as owned:
                yield owned

    def configured_providers(self) -> dict[ProviderKey, bool]:
        return self.settings.configured_providers()

    async def generate_summary(
        self,
        provider: ProviderKey | str,
        transcript: ProcessedTranscript | str,
        style: SummaryStyle | str = SummaryStyle.BULLETS,
        video_url: str | None = None,
        *,
        template: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> SummaryResult:
        """Summarize the transcript with one provider.

        ``template`` skips the template lookup (the fan-out loads it once).
        """
        provider = ProviderKey(provider)
        style = SummaryStyle(style)
        model_name = self.settings.model_name(provider)

        try:
            if template is None:
                template = self.templates.load(style)
            request = PromptRequest(
                template=template,
                transcript=render_transcript(transcript, style),
                style=style,
                video_url=video_url,
            )
            async with self._client_scope(client) as http:
                summary = await self._run(provider, request, http)
        except Exception as e:
            log_error(f"{model_name}: {e}")
            return SummaryResult(
                provider=provider,
                model_name=model_name,
                success=False,
                error=str(e),
            )

        log_success(f"{model_name}: {len(summary)} chars")
        return SummaryResult(
            provider=provider,
            model_name=model_name,
            summary=summary,
            success=True,
        )

    async def _run(self, provider: ProviderKey, request: PromptRequest, client: httpx.AsyncClient) -> str:
        config = provider_config(provider)
        api_key = self.settings.api_key(provider)
        if api_key is None:
            raise ConfigurationError(
                f"{config.api_key_env} is not configured. "
                "Add it to your environment or .env file."
            )

        adapter = self.registry.get(provider)
        validate_key = getattr(adapter, "validate_api_key", None)
        if validate_key is not None:
            validate_key(api_key)

        model = self.settings.model(provider)
        url = adapter.build_url(model, api_key)
        headers = adapter.build_headers(api_key, config)
        body = adapter.build_body(model, request, config, temperature=self.llm.temperature)

        async def attempt() -> str:
            log_step(adapter.name, f"POST {_redact(url)} (model {model})")
            return await self._attempt(adapter, config, client, url, headers, body, request)

        return await retry_with_backoff(
            attempt,
            max_attempts=self.llm.max_retries,
            initial_delay=self.llm.initial_retry_delay,
            sleep=self._sleep,
            label=adapter.name,
        )

    async def _attempt(
        self,
        adapter: ProviderAdapter,
        config: ProviderConfig,
        client: httpx.AsyncClient,
        url: str,
        headers: dict[str, str],
        body: dict,
        request: PromptRequest,
    ) -> str:
        provider_name = adapter.name
        try:
            response = await client.post(url, headers=headers, json=body, timeout=self.llm.request_timeout)
        except httpx.TimeoutException as e:
            raise TransientProviderError(f"{provider_name} request timed out: {e}", provider=provider_name) from e
        except httpx.TransportError as e:
            raise TransientProviderError(f"{provider_name} request failed: {e}", provider=provider_name) from e

        raise_for_status(response, provider_name, config)

        try:
            data = response.json()
        except ValueError as e:
            raise TransientProviderError(f"{provider_name} returned invalid JSON", provider=provider_name) from e

        content = adapter.extract_content(data) if isinstance(data, dict) else None
        if not isinstance(content, str) or not content.strip():
            raise TransientProviderError(f"No content in {provider_name} response", provider=provider_name)

        validate_output(content, provider_name)
        validate_response = getattr(adapter, "validate_response", None)
        if validate_response is not None:
            validate_response(content, request)
        return content

    async def generate_all_summaries(
        self,
        transcript: ProcessedTranscript | str,
        style: SummaryStyle | str = SummaryStyle.BULLETS,
        video_url: str | None = None,
        providers: Sequence[ProviderKey | str] | None = None,
    ) -> list[SummaryResult]:
        """Run every requested provider concurrently, one result each, in request order."""
        style = SummaryStyle(style)
        keys = [ProviderKey(p) for p in providers] if providers is not None else self.registry.keys()
        try:
            template = self.templates.load(style)
        except Exception as e:
            log_error(f"Could not load the '{style.value}' template: {e}")
            return [
                SummaryResult(
                    provider=key,
                    model_name=self.settings.model_name(key),
                    success=False,
                    error=f"Template unavailable: {e}",
                )
                for key in keys
            ]

        log_step("Summary", f"Generating '{style.value}' summaries with {len(keys)} provider(s)")
        async with self._client_scope() as http:
            results = await asyncio.gather(*(
                self.generate_summary(key, transcript, style, video_url, template=template, client=http)
                for key in keys
            ))

        succeeded = sum(1 for r in results if r.success)
        failed = len(results) - succeeded
        if failed:
            log_warning(f"{succeeded} succeeded, {failed} failed")
        else:
            log_success(f"All {succeeded} providers succeeded")
        return list(results)


def build_service(settings: Settings | None = None, config: AppConfig | None = None) -> SummaryService:
    """Service wired from the environment and tubescribe.yaml."""
    settings = settings or Settings.from_env()
    config = config or load_app_config()
    return SummaryService(
        settings,
        templates=FileTemplateSource(config.prompts_dir),
        llm=config.llm,
    )


async def generate_summary(
    provider: ProviderKey | str,
    transcript: ProcessedTranscript | str,
    style: SummaryStyle | str = SummaryStyle.BULLETS,
    video_url: str | None = None,
) -> SummaryResult:
    return await build_service().generate_summary(provider, transcript, style, video_url)


async def generate_all_summaries(
    transcript: ProcessedTranscript | str,
    style: SummaryStyle | str = SummaryStyle.BULLETS,
    video_url: str | None = None,
    providers: Sequence[ProviderKey | str] | None = None,
) -> list[SummaryResult]:
    return await build_service().generate_all_summaries(transcript, style, video_url, providers)
