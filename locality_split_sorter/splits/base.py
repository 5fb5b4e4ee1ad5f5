from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union
from urllib.parse import urlsplit


@dataclass(frozen=True)
class Path:
    """URI 形式的数据路径：scheme://authority/path，按值比较。"""

    scheme: Optional[str]
    authority: Optional[str]
    path: str

    @staticmethod
    def parse(uri: str) -> "Path":
        """只拆出 scheme 和 authority，其余部分（包括 ? 和 #）都属于文件名"""
        parts = urlsplit(uri)
        rest = uri
        if parts.scheme:
            rest = rest[len(parts.scheme) + 1:]
        if rest.startswith("//"):
            rest = rest[2 + len(parts.netloc):]
        return Path(
            scheme=parts.scheme or None,
            authority=parts.netloc or None,
            path=rest or "/",
        )

    def __str__(self) -> str:
        if self.scheme is None:
            if self.authority:
                return f"//{self.authority}{self.path}"
            return self.path
        return f"{self.scheme}://{self.authority or ''}{self.path}"


@dataclass(frozen=True)
class AuthorityKey:
    """ClientCache 的键：(scheme, authority)"""

    scheme: Optional[str]
    authority: Optional[str]

    @staticmethod
    def of(path: Path) -> "AuthorityKey":
        return AuthorityKey(path.scheme, path.authority)

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}"


@dataclass(frozen=True)
class SimpleSplit:
    """只有字节长度的 split"""

    length: int
    locations: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CombinedSplit:
    """由多个文件路径组合而成的 split，length 为总字节数"""

    paths: Tuple[Path, ...]
    length: int
    locations: Tuple[str, ...] = field(default=())

    @staticmethod
    def from_uris(uris: Iterable[str], length: int, locations: Iterable[str] = ()) -> "CombinedSplit":
        return CombinedSplit(
            paths=tuple(Path.parse(u) for u in uris),
            length=int(length),
            locations=tuple(locations),
        )

    @property
    def leading_path(self) -> Optional[Path]:
        return self.paths[0] if self.paths else None


Split = Union[SimpleSplit, CombinedSplit]


def split_from_dict(data: dict) -> Split:
    """从 JSON 描述构造 split：包含 paths 字段即为 CombinedSplit。"""
    length = int(data.get("length", 0))
    locations = tuple(data.get("locations", ()))
    if "paths" in data:
        return CombinedSplit.from_uris(data["paths"], length, locations)
    return SimpleSplit(length=length, locations=locations)


def split_to_dict(split: Split) -> dict:
    if isinstance(split, CombinedSplit):
        return {
            "paths": [str(p) for p in split.paths],
            "length": split.length,
            "locations": list(split.locations),
        }
    return {"length": split.length, "locations": list(split.locations)}
