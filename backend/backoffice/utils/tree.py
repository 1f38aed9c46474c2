"""
树形结构转换
backend/backoffice/utils/tree.py
"""
from typing import Any, Dict, List, Optional


def transformation_tree(items: List[Dict[str, Any]], parent_id: Optional[Any] = None) -> List[Dict[str, Any]]:
    """
    平铺列表转树：筛选 parent_id 匹配的节点，按 order 升序（缺省为0，稳定排序），
    并递归挂载 children。父节点不在列表中的节点不会出现在结果里。
    """
    nodes = [item for item in items if item.get("parent_id") == parent_id]
    nodes.sort(key=lambda item: item.get("order") or 0)
    return [
        {**item, "children": transformation_tree(items, item.get("id"))}
        for item in nodes
    ]
