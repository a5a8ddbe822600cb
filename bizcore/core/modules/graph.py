"""
模块依赖图校验

启动期诊断：检测循环依赖和悬空依赖，只记录不抛出，也不阻止启动。
运行期的依赖展开有自己的 visited 防护，不依赖这里的结果。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from bizcore.core.logger import logger
from bizcore.core.modules.base import ModuleDescriptor


@dataclass
class CatalogValidationResult:
    """依赖图校验结果"""

    # 每个环为一条路径：从环起点到回边前的最后一个键
    cycles: list[list[str]] = field(default_factory=list)
    # 模块键 -> 目录中不存在的依赖键
    missing_dependencies: dict[str, list[str]] = field(default_factory=dict)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)

    @property
    def ok(self) -> bool:
        return not self.cycles and not self.missing_dependencies

    def to_dict(self) -> dict:
        return {
            "cycles": [list(c) for c in self.cycles],
            "missing_dependencies": {k: list(v) for k, v in self.missing_dependencies.items()},
        }


def build_adjacency(descriptors: Iterable[ModuleDescriptor]) -> dict[str, list[str]]:
    """构建 key -> 依赖键列表 的邻接表（边 A -> B 表示 A 依赖 B）"""
    return {d.key: list(d.dependencies) for d in descriptors}


def find_cycles(adjacency: dict[str, list[str]]) -> list[list[str]]:
    """
    三色深度优先搜索查找环

    - visiting: 当前 DFS 栈上的节点
    - visited: 已完全处理的节点
    - path: 显式路径栈

    遇到 visiting 中的节点即发现一个环，记录后继续遍历，
    一个环不会妨碍其它环被发现。不在邻接表中的依赖键直接跳过。
    """
    cycles: list[list[str]] = []
    visiting: set[str] = set()
    visited: set[str] = set()
    path: list[str] = []

    def visit(key: str) -> None:
        visiting.add(key)
        path.append(key)
        for dep in adjacency.get(key, []):
            if dep not in adjacency:
                continue
            if dep in visiting:
                cycles.append(path[path.index(dep) :])
                continue
            if dep not in visited:
                visit(dep)
        path.pop()
        visiting.discard(key)
        visited.add(key)

    for key in adjacency:
        if key not in visited:
            visit(key)

    return cycles


def validate_catalog(descriptors: Iterable[ModuleDescriptor]) -> CatalogValidationResult:
    """
    校验模块依赖图

    Args:
        descriptors: 模块目录（ModuleCatalog 或描述符列表）
    """
    adjacency = build_adjacency(descriptors)
    result = CatalogValidationResult(cycles=find_cycles(adjacency))

    for key, deps in adjacency.items():
        missing = [dep for dep in deps if dep not in adjacency]
        if missing:
            result.missing_dependencies[key] = missing

    return result


def log_validation_result(result: CatalogValidationResult) -> None:
    """输出启动期诊断日志"""
    for cycle in result.cycles:
        chain = " -> ".join(cycle + cycle[:1])
        logger.error(f"Circular module dependency detected: {chain}")

    for key, missing in result.missing_dependencies.items():
        logger.warning(f"Module [{key}] depends on unknown modules: {', '.join(missing)}")

    if result.ok:
        logger.info("Module dependency graph validated: no cycles, no dangling dependencies")
