"""Store 文件写入辅助

整文件覆盖写入：先写同目录下的临时文件，再 os.replace 到目标路径。
写入中途失败时目标文件保持上一次成功保存的内容。
"""

import os
import tempfile
from pathlib import Path


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """原子替换写入

    Args:
        path: 目标文件路径（父目录不存在时自动创建）
        data: 完整文件内容

    Raises:
        OSError: 创建临时文件、写入或替换失败；临时文件已清理
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(data)
        os.replace(tmp_path, path)
    except OSError:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise
