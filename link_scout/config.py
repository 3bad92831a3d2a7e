# === FILE: link_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации проверки ссылок LinkScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)


class CheckerConfig(BaseModel):
    """Конфигурация для одного запуска проверки ссылок."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    domain: str = Field(..., min_length=1, description="Имя хоста, к которому относятся находки.")
    tree_file: Path = Field(..., description="YAML/JSON-файл с деревом контента.")
    site_node_path: str = Field("/", description="Путь узла сайта, с которого начинается обход.")
    workspace: str = Field("live", min_length=1, description="Рабочее пространство для обхода.")
    primary_workspace: str = Field(
        "live", min_length=1, description="Пространство для вычисления путей целевых узлов."
    )
    show_hidden: bool = Field(False, description="Показывать скрытые узлы при обходе.")
    document_types: List[str] = Field(default_factory=lambda: ["document"], min_length=1)
    content_types: List[str] = Field(default_factory=lambda: ["content"])
    node_types: Dict[str, List[str]] = Field(
        default_factory=dict, description="Супертипы для каждого типа узла."
    )
    max_depth: int = Field(256, ge=1, description="Предел глубины при обходе предков.")

    @field_validator("domain", mode="before")
    def _strip_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            for prefix in ("https://", "http://"):
                if v.startswith(prefix):
                    v = v[len(prefix):]
            return v.rstrip("/")
        return v

    @field_validator("tree_file", mode="after")
    def _expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @model_validator(mode="after")
    def _check_tree_file_exists(self) -> CheckerConfig:
        if not self.tree_file.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.tree_file))
        return self


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_mapping(path: Path) -> dict[str, Any]:
    """Читает YAML или JSON по расширению файла."""
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Неподдерживаемый формат файла: {suffix}")


def load_config(path: Union[str, Path, None]) -> CheckerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CheckerConfig.
    Относительный tree_file считается от каталога конфига.
    При отсутствии файла конфига или дерева бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG.resolve()
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    data = read_mapping(path_obj)

    tree_file = data.get("tree_file")
    if isinstance(tree_file, str) and not Path(tree_file).expanduser().is_absolute():
        data["tree_file"] = str(path_obj.parent / tree_file)

    try:
        return CheckerConfig(**data)
    except ValidationError:
        raise
