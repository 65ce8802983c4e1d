from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai.types.chat import ChatCompletion

from rag_llm_lib import (
    AnthropicProvider,
    ChatOptions,
    ChatProvider,
    ChatResult,
    LLMConfig,
    LLMRouter,
    OpenAIProvider,
    ProviderConfigurationError,
    ProviderSettings,
    ToolContext,
    ToolRegistry,
    UnknownProviderError,
    VertexProvider,
    get_default_config,
)
from rag_llm_lib.router import DEFAULT_MODELS


def completion(**message: Any) -> ChatCompletion:
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4o-mini",
            "choices": [{"index": 0, "finish_reason": "stop", "message": {"role": "assistant", **message}}],
        }
    )


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def router(time_registry: ToolRegistry, mock_openai_client: Any) -> LLMRouter:
    openai_provider = OpenAIProvider(time_registry, client_factory=lambda api_key: mock_openai_client)
    return LLMRouter(time_registry, providers={"openai": openai_provider})


def test_default_configs() -> None:
    assert DEFAULT_MODELS == {
        "vertex": "gemini-1.5-flash",
        "openai": "gpt-4o-mini",
        "anthropic": "claude-3-haiku-20240307",
    }
    for provider, model in DEFAULT_MODELS.items():
        config = get_default_config(provider)
        assert config.provider == provider
        assert config.model == model
        assert config.api_key is None


def test_default_config_unknown_provider(router: LLMRouter) -> None:
    with pytest.raises(UnknownProviderError, match="Unknown LLM provider: cohere"):
        router.get_default_config("cohere")


@pytest.mark.asyncio
async def test_unknown_provider_fails_before_network(router: LLMRouter, mock_openai_client: Any) -> None:
    with pytest.raises(UnknownProviderError) as exc_info:
        await router.chat("Hi", LLMConfig(provider="cohere"))

    with pytest.raises(ProviderConfigurationError):
        router.chat_stream("Hi", LLMConfig(provider="cohere"))

    assert exc_info.value.provider == "cohere"
    mock_openai_client.chat.completions.create.assert_not_called()


def test_providers_created_on_demand(time_registry: ToolRegistry) -> None:
    settings = ProviderSettings(gcp_project_id="my-project")
    router = LLMRouter(time_registry, settings=settings)

    vertex = router.get_provider("vertex")
    anthropic = router.get_provider("anthropic")

    assert isinstance(vertex, VertexProvider)
    assert isinstance(anthropic, AnthropicProvider)
    assert router.get_provider("vertex") is vertex
    assert vertex.settings is settings
    assert vertex.registry is time_registry


@pytest.mark.asyncio
async def test_default_provider_is_vertex(time_registry: ToolRegistry) -> None:
    vertex = MagicMock(spec=ChatProvider)
    vertex.send = AsyncMock(return_value=ChatResult(content="from vertex"))
    router = LLMRouter(time_registry, providers={"vertex": vertex})

    result = await router.chat("Hi")

    assert result.content == "from vertex"
    sent_config = vertex.send.call_args.args[1]
    assert sent_config.provider == "vertex"


@pytest.mark.asyncio
async def test_vertex_without_project_is_configuration_error(time_registry: ToolRegistry) -> None:
    router = LLMRouter(time_registry, settings=ProviderSettings())

    with pytest.raises(ProviderConfigurationError, match="GCP_PROJECT_ID"):
        await router.chat("Hi", LLMConfig(provider="vertex"))


def test_default_settings_come_from_environment(time_registry: ToolRegistry, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GCP_PROJECT_ID", "env-project")
    monkeypatch.setenv("GCP_REGION", "europe-west1")

    router = LLMRouter(time_registry)
    vertex = router.get_provider("vertex")

    assert router.settings.gcp_project_id == "env-project"
    assert vertex.settings is router.settings
    assert vertex.settings.gcp_region == "europe-west1"
    assert VertexProvider(time_registry).settings.gcp_project_id == "env-project"


@pytest.mark.asyncio
async def test_scenario_plain_answer(router: LLMRouter, mock_openai_client: Any, tool_context: ToolContext) -> None:
    """Tools offered, but the model answers directly."""
    mock_openai_client.chat.completions.create.return_value = completion(content="Direct answer.")

    result = await router.chat(
        "Hello", LLMConfig(provider="openai", api_key="sk"), ChatOptions(tools=True, tool_context=tool_context)
    )

    assert result.content == "Direct answer."
    assert result.tool_calls is None
    assert result.tool_results is None


@pytest.mark.asyncio
async def test_scenario_tool_call(router: LLMRouter, mock_openai_client: Any, tool_context: ToolContext) -> None:
    """The model calls get_current_time; a second request carries the result."""
    mock_openai_client.chat.completions.create.side_effect = [
        completion(
            content=None,
            tool_calls=[
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": "get_current_time", "arguments": '{"timezone": "UTC"}'},
                }
            ],
        ),
        completion(content="It's 3:04 PM in UTC."),
    ]

    result = await router.chat(
        "What time is it?",
        LLMConfig(provider="openai", api_key="sk"),
        ChatOptions(tools=True, tool_context=tool_context),
    )

    assert mock_openai_client.chat.completions.create.call_count == 2
    assert result.content == "It's 3:04 PM in UTC."
    assert result.tool_results[0].result["timezone"] == "UTC"


@pytest.mark.asyncio
async def test_chat_stream_dispatches(time_registry: ToolRegistry) -> None:
    async def fragments():
        for part in ["Hel", "lo", " world"]:
            yield part

    class StaticProvider(ChatProvider):
        name = "openai"
        display_name = "Static"
        default_model = "static"

        async def _send_impl(self, message, config, options, declarations):
            return ChatResult(content="unused")

        def _stream_impl(self, message, config, options):
            return fragments()

    router = LLMRouter(time_registry, providers={"openai": StaticProvider(time_registry)})

    async with router.chat_stream("Hi", LLMConfig(provider="openai")) as stream:
        received = [f async for f in stream]

    assert received == ["Hel", "lo", " world"]
    assert stream.result.content == "Hello world"


@pytest.mark.asyncio
async def test_aclose_releases_providers(router: LLMRouter, mock_openai_client: Any) -> None:
    mock_openai_client.chat.completions.create.return_value = completion(content="ok")
    await router.chat("Hi", LLMConfig(provider="openai", api_key="sk"))

    await router.aclose()

    mock_openai_client.close.assert_awaited_once()
