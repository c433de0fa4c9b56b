"""
Admin configuration store

Keeps the three administrator documents as YAML files in one directory:

- ``scoring_weights.yaml``  lever weights and quadrant threshold
- ``tshirt_sizing.yaml``    size buckets, roles and mapping rules
- ``tom.yaml``              Target Operating Model phases and presets

Documents are validated on load and on save. Each carries a short content
SHA; a save must quote the SHA it was based on so that two administrators
cannot silently overwrite each other's edits.
"""

import hashlib
import os
import tempfile
import threading
import time
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from core.exceptions import ConfigurationError, ConflictError, NotFoundError, ValidationError
from core.logging import get_logger
from core.metrics import metrics
from d1_scoring.weights_schema import ScoringWeights
from d2_sizing.schema import TShirtSizingConfig
from d3_operating_model.phases import TomConfig

logger = get_logger(__name__, domain="metadata")

SHA_LENGTH = 8


@dataclass(frozen=True)
class DocumentSpec:
    filename: str
    model: Type[BaseModel]
    setting: str


DOCUMENTS: Dict[str, DocumentSpec] = {
    "scoring-weights": DocumentSpec(settings.scoring_weights_file, ScoringWeights, "scoring_weights"),
    "tshirt-sizing": DocumentSpec(settings.tshirt_sizing_file, TShirtSizingConfig, "tshirt_sizing"),
    "tom": DocumentSpec(settings.tom_file, TomConfig, "tom"),
}


@dataclass(frozen=True)
class ConfigDocument:
    name: str
    data: Dict[str, Any]
    sha: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "data": self.data, "sha": self.sha}


def content_sha(content: str) -> str:
    """First 8 hex characters of the SHA-256 of the document text"""
    return hashlib.sha256(content.encode()).hexdigest()[:SHA_LENGTH]


class ConfigStore:
    """YAML-file backed store for the admin configuration documents"""

    def __init__(self, config_dir: os.PathLike | str):
        self.config_dir = Path(config_dir)
        self._lock = threading.Lock()

    def _spec(self, name: str) -> DocumentSpec:
        spec = DOCUMENTS.get(name)
        if spec is None:
            raise NotFoundError("Configuration document", name)
        return spec

    def path_for(self, name: str) -> Path:
        return self.config_dir / self._spec(name).filename

    def _read(self, name: str) -> tuple[Optional[str], Optional[BaseModel]]:
        path = self.path_for(name)
        if not path.exists():
            return None, None
        content = path.read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed YAML in {path}: {exc}", setting=self._spec(name).setting) from exc
        return content, self._validate_loaded(name, data, str(path))

    def _validate_loaded(self, name: str, data: Any, source: str) -> BaseModel:
        spec = self._spec(name)
        if not data:
            raise ConfigurationError(f"Configuration document '{name}' is empty: {source}", setting=spec.setting)
        try:
            return spec.model.model_validate(data)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {source}: {exc}", setting=spec.setting) from exc

    def load(self, name: str) -> BaseModel:
        """
        Load and validate a document

        Raises:
            NotFoundError: Unknown document name
            ConfigurationError: File missing or invalid
        """
        start = time.time()
        try:
            content, model = self._read(name)
            if model is None:
                raise ConfigurationError(
                    f"Configuration document '{name}' missing: {self.path_for(name)}",
                    setting=self._spec(name).setting,
                )
        except ConfigurationError:
            metrics.track_config_reload(name, time.time() - start, status="error")
            raise
        metrics.track_config_reload(name, time.time() - start)
        return model

    def get_document(self, name: str) -> ConfigDocument:
        """Validated document with its content SHA"""
        content, model = self._read(name)
        if model is None:
            raise ConfigurationError(
                f"Configuration document '{name}' missing: {self.path_for(name)}",
                setting=self._spec(name).setting,
            )
        return ConfigDocument(name=name, data=model.model_dump(mode="json"), sha=content_sha(content))

    def current_sha(self, name: str) -> Optional[str]:
        path = self.path_for(name)
        if not path.exists():
            return None
        return content_sha(path.read_text(encoding="utf-8"))

    def save_document(self, name: str, data: Dict[str, Any], original_sha: Optional[str] = None) -> ConfigDocument:
        """
        Validate and persist a document

        Args:
            name: Document name (``scoring-weights``, ``tshirt-sizing``, ``tom``)
            data: Document content
            original_sha: SHA the edit was based on; required once the file exists

        Raises:
            ValidationError: Content fails validation
            ConflictError: The file changed since ``original_sha`` was read
        """
        spec = self._spec(name)
        try:
            model = spec.model.model_validate(data)
        except PydanticValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False)
            raise ValidationError(f"Invalid {name} configuration", errors=errors) from exc

        content = yaml.safe_dump(model.model_dump(mode="json"), sort_keys=False, allow_unicode=True)
        path = self.path_for(name)

        with self._lock:
            current = self.current_sha(name)
            if current is not None and original_sha != current:
                logger.warning(
                    "Rejected stale configuration save",
                    extra={"document": name, "expected_sha": original_sha, "current_sha": current},
                )
                raise ConflictError(name, original_sha or "none", current)

            self.config_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.config_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(content)
                os.replace(tmp_path, path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise

        sha = content_sha(content)
        logger.info("Configuration saved", extra={"document": name, "sha": sha})
        metrics.track_config_reload(name, 0.0, status="saved")
        return ConfigDocument(name=name, data=model.model_dump(mode="json"), sha=sha)

    def load_scoring_weights(self) -> ScoringWeights:
        return self.load("scoring-weights")

    def load_sizing_config(self) -> TShirtSizingConfig:
        return self.load("tshirt-sizing")

    def load_tom_config(self) -> TomConfig:
        return self.load("tom")

    def check(self) -> Dict[str, str]:
        """Load every document, reporting ``ok`` or the error message per document"""
        results = {}
        for name in DOCUMENTS:
            try:
                self.load(name)
                results[name] = "ok"
            except ConfigurationError as exc:
                results[name] = exc.message
        return results


@lru_cache()
def get_config_store() -> ConfigStore:
    """Process-wide store rooted at ``settings.config_dir``"""
    return ConfigStore(settings.config_dir)
