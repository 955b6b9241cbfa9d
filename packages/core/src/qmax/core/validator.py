"""Blueprint 内容校验器

validate_blueprint() 是纯函数：不抛异常、不修改入参，
所有问题作为 issues 列表返回。校验是建议性的，不阻止保存。
结构规则以 JSON Schema (Draft 2020-12) 表达，由 jsonschema 执行。
"""

import copy
from typing import Any

import structlog
from jsonschema import Draft202012Validator, ValidationError

from .models.validation import ValidationResult

log = structlog.get_logger()

# 调用方未定义时补齐的顶层默认字段
DEFAULT_FIELDS: dict[str, Any] = {
    "app": "qmax",
    "schemaVersion": 1,
    "meta": {},
}

NOT_AN_OBJECT = "blueprint must be a JSON object"


def _text_field(name: str) -> dict[str, Any]:
    """name 存在且为非空白字符串"""
    return {
        "required": [name],
        "properties": {name: {"type": "string", "pattern": r"\S"}},
    }


# allOf 的顺序即 issues 的顺序
BLUEPRINT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "allOf": [
        {"anyOf": [_text_field("screenId"), _text_field("id")]},
        {"anyOf": [_text_field("name"), _text_field("screenName")]},
        {"anyOf": [{"required": ["layout"]}, {"required": ["screens"]}]},
    ],
    "properties": {
        "screens": {"type": "array", "items": {"type": "object"}},
        "layout": {"type": ["object", "array"]},
    },
}

_ALL_OF_ISSUES = (
    "missing required field: screenId",
    "missing required field: name",
    "missing required field: layout",
)

_validator = Draft202012Validator(BLUEPRINT_SCHEMA)


def _issue_order(error: ValidationError) -> tuple:
    """identity / name / structure 在前，其后 screens（按下标）、layout"""
    schema_path = list(error.relative_schema_path)
    path = list(error.path)
    if schema_path[:1] == ["allOf"]:
        return (0, schema_path[1])
    if path[:1] == ["screens"]:
        return (1, -1 if len(path) == 1 else path[1])
    return (2, 0)


def _issue_text(error: ValidationError) -> str:
    schema_path = list(error.relative_schema_path)
    path = list(error.path)
    if schema_path[:1] == ["allOf"]:
        return _ALL_OF_ISSUES[schema_path[1]]
    if path == ["screens"]:
        return "screens must be an array"
    if path[:1] == ["screens"]:
        return f"screens[{path[1]}] must be an object"
    if path == ["layout"]:
        return "layout must be an object or an array"
    return error.message


def normalize_blueprint(candidate: Any) -> dict[str, Any]:
    """默认字段合并：调用方已定义的字段优先"""
    normalized = copy.deepcopy(DEFAULT_FIELDS)
    if isinstance(candidate, dict):
        normalized.update(copy.deepcopy(candidate))
    return normalized


def validate_blueprint(candidate: Any) -> ValidationResult:
    """校验 blueprint 的结构最低要求

    Args:
        candidate: 待校验的 blueprint（任意 JSON 值）

    Returns:
        ValidationResult，valid 当且仅当 issues 为空
    """
    if not _validator.is_type(candidate, "object"):
        issues = [NOT_AN_OBJECT]
    else:
        errors = sorted(_validator.iter_errors(candidate), key=_issue_order)
        issues = [_issue_text(e) for e in errors]

    result = ValidationResult(
        valid=not issues,
        issues=issues,
        normalized_content=normalize_blueprint(candidate),
    )
    log.debug("blueprint_validated", valid=result.valid, issue_count=len(issues))
    return result
