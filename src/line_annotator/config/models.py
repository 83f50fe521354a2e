from __future__ import annotations

import codecs
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Config models map YAML sections to typed structures; every section is optional.


class AnnotationConfig(BaseModel):
    # Text inserted around each line; encoded with `encoding` before use.
    model_config = ConfigDict(extra="forbid")
    prefix: str = ""
    suffix: str = ""
    encoding: str = "utf-8"

    @model_validator(mode="after")
    def _require_encodable_annotations(self) -> AnnotationConfig:
        # Unknown codecs or unencodable text must fail at load time, not on the first line.
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"annotation.encoding is not a known codec: {self.encoding}") from exc
        for name, text in (("prefix", self.prefix), ("suffix", self.suffix)):
            try:
                text.encode(self.encoding)
            except (UnicodeEncodeError, LookupError) as exc:
                raise ValueError(f"annotation.{name} cannot be encoded as {self.encoding}") from exc
        return self


class InputConfig(BaseModel):
    # Where bytes come from when no command is given; stdin when path is unset.
    model_config = ConfigDict(extra="forbid")
    path: str | None = None
    chunk_size: int = Field(default=65536, gt=0)


class OutputConfig(BaseModel):
    # Where annotated bytes go.
    model_config = ConfigDict(extra="forbid")
    kind: Literal["stdout", "stderr", "file"] = "stdout"
    path: str | None = None
    atomic_replace: bool = False

    @model_validator(mode="after")
    def _require_path_for_file(self) -> OutputConfig:
        if self.kind == "file" and not self.path:
            raise ValueError("output.path is required when output.kind is 'file'")
        return self


class LoggingConfig(BaseModel):
    # Structured diagnostics; stderr keeps stdout free for annotated output.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stderr", "jsonl", "none"] = "stderr"
    level: Literal["debug", "info", "warning", "error"] = "warning"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path_for_jsonl(self) -> LoggingConfig:
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is 'jsonl'")
        return self


class AppConfig(BaseModel):
    # Root config object.
    model_config = ConfigDict(extra="forbid")
    version: Literal[1] = 1
    annotation: AnnotationConfig = Field(default_factory=AnnotationConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
