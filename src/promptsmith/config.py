from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Upstream chat service
    ollama_api_url: str = "https://ai.mailbyai.site"
    upstream_model: str = "metis"

    # Serverless hosting (VERCEL=1) gets shorter timeouts and a static health check
    vercel: str = ""

    # Timeouts (seconds)
    generation_timeout: float = 30.0
    generation_timeout_serverless: float = 25.0
    generate_timeout: float = 30.0
    generate_timeout_serverless: float = 10.0
    analysis_timeout: float = 15.0
    analysis_timeout_serverless: float = 8.0
    health_timeout: float = 5.0

    # The browser retries timed-out requests; server-side retries stay off
    # unless configured, and then use a fixed delay
    upstream_max_retries: int = 0
    upstream_retry_delay: float = 2.0

    # Ask the model to critique the prompt before falling back to the heuristic
    ai_analysis_enabled: bool = True

    # CORS
    cors_origins: list[str] = ["*"]

    # Single-page app shell
    static_dir: Path = _PACKAGE_DIR / "static"

    @property
    def is_serverless(self) -> bool:
        return self.vercel == "1"

    def resolve_generation_timeout(self) -> float:
        if self.is_serverless:
            return self.generation_timeout_serverless
        return self.generation_timeout

    def resolve_generate_timeout(self) -> float:
        if self.is_serverless:
            return self.generate_timeout_serverless
        return self.generate_timeout

    def resolve_analysis_timeout(self) -> float:
        if self.is_serverless:
            return self.analysis_timeout_serverless
        return self.analysis_timeout

    def upstream_call_budget(self, timeout: float) -> float:
        """Worst-case seconds one upstream call can take, retries included."""
        return (1 + self.upstream_max_retries) * timeout + self.upstream_max_retries * self.upstream_retry_delay

    def evaluate_budget(self) -> float:
        """Worst-case seconds for ``/api/evaluate``: generation then analysis."""
        budget = self.upstream_call_budget(self.resolve_generation_timeout())
        if self.ai_analysis_enabled:
            budget += self.upstream_call_budget(self.resolve_analysis_timeout())
        return budget


settings = Settings()
