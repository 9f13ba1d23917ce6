"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from clinic_scribe.l1_entities.config import AppConfig
from clinic_scribe.l2_use_cases.ports.llm_client import LLMClient
from clinic_scribe.l2_use_cases.ports.persistence import SessionRepository
from clinic_scribe.l2_use_cases.ports.summarizer import Summarizer
from clinic_scribe.l2_use_cases.ports.transcript_source import TranscriptSource
from clinic_scribe.l3_interface_adapters.controllers.session_controller import SessionController
from clinic_scribe.l3_interface_adapters.gateways.file_persistence import FileSessionRepository
from clinic_scribe.l3_interface_adapters.gateways.llm_summarizer import LLMSummarizer
from clinic_scribe.l3_interface_adapters.gateways.ollama_llm_client import OllamaLLMClient
from clinic_scribe.l3_interface_adapters.gateways.openai_llm_client import OpenAICompatLLMClient
from clinic_scribe.l3_interface_adapters.gateways.scripted_summarizer import ScriptedSummarizer
from clinic_scribe.l3_interface_adapters.gateways.scripted_transcript_source import ScriptedTranscriptSource
from clinic_scribe.l4_frameworks_and_drivers.infra_config import InfraConfig


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        output_dir: Path,
        infra: InfraConfig | None = None,
        *,
        patient_id: str = 'default',
        source: TranscriptSource | None = None,
    ) -> None:
        self.config = config
        self.output_dir = output_dir

        _infra = infra or InfraConfig()
        self.persistence: SessionRepository = FileSessionRepository(output_dir)
        self.source: TranscriptSource = source or ScriptedTranscriptSource(
            interval=config.transcription.fragment_interval,
        )
        self.llm_client: LLMClient | None = None
        if _infra.summarizer == 'llm':
            self.llm_client = self.build_llm_client(_infra)
            self.summarizer: Summarizer = LLMSummarizer(
                self.llm_client,
                model=config.summary.model,
                timeout=config.summary.timeout,
            )
        else:
            self.summarizer = ScriptedSummarizer(latency=config.summary.latency)

        self.controller = SessionController(
            config=config,
            source=self.source,
            summarizer=self.summarizer,
            persistence=self.persistence,
            patient_id=patient_id,
        )

    @staticmethod
    def build_llm_client(infra: InfraConfig) -> LLMClient:
        if infra.llm_provider == 'openai':
            return OpenAICompatLLMClient(api_key=infra.openai.api_key, base_url=infra.openai.base_url)
        return OllamaLLMClient(host=infra.ollama.host)
