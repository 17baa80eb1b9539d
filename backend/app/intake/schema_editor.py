from typing import Callable, Literal

from app.models.summary import LANGUAGES, SummaryRequestConfig

LanguageKind = Literal["source", "target"]


class SchemaEditor:
    """Incremental editing of a SummaryRequestConfig.

    Every edit replaces the held config with a new one and passes it to
    ``on_change`` when a callback is given.
    """

    def __init__(
        self,
        schema: SummaryRequestConfig | None = None,
        on_change: Callable[[SummaryRequestConfig], None] | None = None,
    ):
        self.schema = schema or SummaryRequestConfig()
        self.on_change = on_change

    def _update(self, **changes) -> SummaryRequestConfig:
        self.schema = self.schema.model_copy(update=changes)
        if self.on_change is not None:
            self.on_change(self.schema)
        return self.schema

    def add_subject(self, subject: str) -> SummaryRequestConfig:
        """Append a subject; blank input is ignored, duplicates are kept."""
        subject = subject.strip()
        if not subject:
            return self.schema
        return self._update(subjects=[*self.schema.subjects, subject])

    def remove_subject(self, index: int) -> SummaryRequestConfig:
        subjects = [s for i, s in enumerate(self.schema.subjects) if i != index]
        return self._update(subjects=subjects)

    def set_language(self, kind: LanguageKind, value: str) -> SummaryRequestConfig:
        if value not in LANGUAGES:
            raise ValueError(f"Unsupported language '{value}'. Choose from: {', '.join(LANGUAGES)}")
        if kind == "source":
            return self._update(source_language=value)
        if kind == "target":
            return self._update(target_language=value)
        raise ValueError(f"Unknown language kind '{kind}'")
