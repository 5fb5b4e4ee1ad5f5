from typing import Any, Optional


class SplitSortError(Exception):
    """split 排序子系统的异常基类"""


class ConfigurationError(SplitSortError):
    """本地性查询后端不可用或配置错误，构造阶段直接失败"""


class LookupFailure(SplitSortError):
    """单个路径的本地性查询失败（超时 / 返回格式错误 / 缺少句柄）

    只在 oracle 适配层内部抛出，由 LocalityOracleClient 捕获并记为 0 分。
    """

    def __init__(self, path: Any, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ComparisonError(SplitSortError):
    """比较过程中出现的非预期异常，本次排序结果不可用"""

    def __init__(self, message: str, left: Optional[Any] = None, right: Optional[Any] = None):
        super().__init__(message)
        self.left = left
        self.right = right
