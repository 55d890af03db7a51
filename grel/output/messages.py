"""User-facing message tables.

``load_messages(lang)`` is called once per run and the resulting
``Messages`` is passed to whoever prints or formats text for the user.
``zh-cn`` is the default; unknown languages fall back to it.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DEFAULT_LANG", "SUPPORTED_LANGS", "Messages", "load_messages", "localize"]

DEFAULT_LANG = "zh-cn"


@dataclass(frozen=True, slots=True)
class Messages:
    lang: str
    invalid_tag: str
    invalid_version: str
    unknown_tag: str
    repository_access: str
    revision_range: str
    success: str
    failure: str
    api_error: str
    transport_error: str
    decode_error: str
    upload_start: str
    upload_success: str
    upload_failure: str
    file_read_error: str
    not_a_file: str
    no_filename: str
    empty_manual_fields: str

    def get(self, key: str) -> str:
        value = getattr(self, key, None)
        if not isinstance(value, str) or key == "lang":
            raise KeyError(key)
        return value


_EN_US = Messages(
    lang="en-us",
    invalid_tag="Invalid semantic version tag name",
    invalid_version="Invalid version",
    unknown_tag="Previous tag not found",
    repository_access="Failed to read repository",
    revision_range="Invalid revision range",
    success="Release created successfully",
    failure="Failed to create release",
    api_error="API request failed with status",
    transport_error="API request failed",
    decode_error="Failed to parse release creation response",
    upload_start="Uploading artifact",
    upload_success="Successfully uploaded artifact",
    upload_failure="Failed to upload artifact",
    file_read_error="Failed to read artifact file",
    not_a_file="Artifact path is not a file or does not exist, skipping",
    no_filename="Could not get filename for artifact, skipping",
    empty_manual_fields="Tag name, release name, and body cannot be empty",
)

_ZH_CN = Messages(
    lang="zh-cn",
    invalid_tag="无效的语义化版本标签名称",
    invalid_version="无效的版本号",
    unknown_tag="未找到指定的上一个标签",
    repository_access="读取仓库失败",
    revision_range="无效的提交范围",
    success="版本发布成功创建",
    failure="创建版本发布失败",
    api_error="API 请求失败，状态码",
    transport_error="API 请求失败",
    decode_error="解析版本发布响应失败",
    upload_start="开始上传 artifact",
    upload_success="成功上传 artifact",
    upload_failure="上传 artifact 失败",
    file_read_error="读取 artifact 文件失败",
    not_a_file="artifact 路径不是文件或不存在，已跳过",
    no_filename="无法获取 artifact 文件名，已跳过",
    empty_manual_fields="标签名称、版本名称和描述不能为空",
)

_TABLES = {m.lang: m for m in (_EN_US, _ZH_CN)}

SUPPORTED_LANGS = tuple(sorted(_TABLES))


def load_messages(lang: str) -> Messages:
    return _TABLES.get(lang.strip().lower(), _TABLES[DEFAULT_LANG])


def localize(key: str, lang: str) -> str:
    """Single lookup; raises KeyError for an unknown key."""
    return load_messages(lang).get(key)
