"""
请求客户端信息解析（登录日志用）
backend/backoffice/utils/client_info.py
"""
import ipaddress
from typing import Mapping, Optional

from backoffice.schemas.sys_auth import ClientInfo

_BROWSERS = ("Chrome", "Firefox", "Safari", "Edge")


def _is_ip(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        ipaddress.ip_address(value.strip())
    except ValueError:
        return False
    return True


def parse_browser(user_agent: Optional[str]) -> str:
    if user_agent:
        for name in _BROWSERS:
            if name in user_agent:
                return name
    return "Other"


def extract_client_info(headers: Mapping[str, str], peer_host: Optional[str] = None) -> ClientInfo:
    """
    - os：sec-ch-ua-platform 请求头（去掉引号）
    - browser：User-Agent 中首个匹配的 Chrome/Firefox/Safari/Edge，否则 Other
    - ip：X-Real-IP 为合法地址时优先，否则取连接对端地址
    """
    platform = (headers.get("sec-ch-ua-platform") or "").replace('"', "")
    real_ip = headers.get("x-real-ip")
    ip = real_ip.strip() if _is_ip(real_ip) else peer_host
    return ClientInfo(os=platform, browser=parse_browser(headers.get("user-agent")), ip=ip)
