"""Project file decoding for structure checks.

A project is either a zip archive (``.sb3``) holding ``project.json`` or a
bare ``project.json``. Decoding only confirms the structure; running the
project is the engine's job.
"""

from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from scratch_run.domain.errors import BlockedExtension, InvalidProject, UnreadableFile

PROJECT_ENTRY = "project.json"


class ProjectTarget(BaseModel):
    # Only the fields the check relies on; blocks, costumes, etc. pass through untouched.
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    name: str
    is_stage: bool = Field(alias="isStage")


class ProjectDocument(BaseModel):
    model_config = ConfigDict(extra="allow")
    targets: list[ProjectTarget]
    extensions: list[str] = Field(default_factory=list)
    meta: dict[str, object] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _single_stage(self) -> ProjectDocument:
        stages = [target for target in self.targets if target.is_stage]
        if len(stages) != 1:
            raise ValueError(f"project must have exactly one stage target, found {len(stages)}")
        return self


def read_project_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        # Reported verbatim by the CLI.
        raise UnreadableFile(str(exc)) from exc


def decode_project(data: bytes) -> ProjectDocument:
    raw = _extract_project_json(data)
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidProject(f"{PROJECT_ENTRY} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidProject(f"{PROJECT_ENTRY} root must be an object")
    try:
        return ProjectDocument.model_validate(payload)
    except ValidationError as exc:
        raise InvalidProject(str(exc)) from exc


def reject_extensions(document: ProjectDocument) -> None:
    # Every listed extension would need a dynamic load, which headless runs refuse.
    if document.extensions:
        raise BlockedExtension(document.extensions[0])


def _extract_project_json(data: bytes) -> bytes:
    buffer = io.BytesIO(data)
    if not zipfile.is_zipfile(buffer):
        return data
    try:
        with zipfile.ZipFile(buffer) as archive:
            return archive.read(PROJECT_ENTRY)
    except KeyError as exc:
        raise InvalidProject(f"archive has no {PROJECT_ENTRY}") from exc
    except zipfile.BadZipFile as exc:
        raise InvalidProject(f"corrupt archive: {exc}") from exc
