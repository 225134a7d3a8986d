"""SiliconFlow API provider for commit message generation."""

from .base import OpenAICompatibleProvider


class SiliconFlowProvider(OpenAICompatibleProvider):
    """SiliconFlow API provider.

    SiliconFlow exposes an OpenAI-compatible API, so only the endpoint
    and the credential variable differ.
    """

    PROVIDER_NAME = "SiliconFlow"
    DEFAULT_BASE_URL = "https://api.siliconflow.cn/v1"
    ENV_VAR_NAME = "SILICON_KEY"
