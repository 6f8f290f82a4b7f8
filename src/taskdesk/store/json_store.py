"""JSON 文本存储 -- 可读的 tagged-union 格式

文件内容是 pretty-print 的项目数组，每个任务记录带 TIPO_DA_CLASSE 判别字段。
编解码细节见 codecs 模块。空白文件或顶层 null 视为空集合。
"""

import json
from pathlib import Path

import structlog

from ..config import get_json_store_path
from ..exceptions import SchemaMismatchError, StorageIOError
from ..models.project import Project
from .codecs import decode_projects, encode_projects
from .files import write_bytes_atomic

log = structlog.get_logger()


class JsonProjectStore:
    """ProjectStore 的 JSON 文本实现"""

    def __init__(self, path: str | Path | None = None, indent: int = 2) -> None:
        if path is not None and not str(path).strip():
            raise ValueError("store path must not be empty")
        self.path = Path(path) if path is not None else get_json_store_path()
        self._indent = indent

    def save(self, projects: list[Project]) -> None:
        """序列化为 JSON 并整文件原子替换

        文本在内存中完成 UTF-8 编码后才写盘；无法编码的内容
        （如孤立的代理字符）抛出 StorageIOError，已有文件保持不变。
        """
        try:
            text = json.dumps(encode_projects(projects), ensure_ascii=False, indent=self._indent)
            data = (text + "\n").encode("utf-8")
        except (TypeError, ValueError) as e:
            raise StorageIOError(self.path, e) from e

        try:
            write_bytes_atomic(self.path, data)
        except OSError as e:
            raise StorageIOError(self.path, e) from e

        log.info("projects_saved", path=str(self.path), store="json", count=len(projects))

    def load(self) -> list[Project]:
        """读取项目列表，文件不存在、为空白或内容为 null 时返回空列表

        以字节读取后再按 UTF-8 解码，二进制文件会被识别为格式不符，
        而不是被当作乱码文本解析。
        """
        try:
            with self.path.open("rb") as fh:
                raw = fh.read()
        except FileNotFoundError:
            log.info("store_file_missing", path=str(self.path), store="json")
            return []
        except OSError as e:
            raise StorageIOError(self.path, e) from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaMismatchError(self.path, "file is not UTF-8 JSON text") from e

        if not text.strip():
            log.info("store_file_empty", path=str(self.path), store="json")
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaMismatchError(self.path, f"malformed JSON ({e})") from e

        if data is None:
            log.info("store_file_empty", path=str(self.path), store="json")
            return []

        projects = decode_projects(data, self.path)
        log.info("projects_loaded", path=str(self.path), store="json", count=len(projects))
        return projects
