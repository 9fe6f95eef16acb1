# hostel/remote/backend.py
from typing import Optional

import requests  # type: ignore

from ..repositories import Backend
from .auth import RemoteAuthService
from .client import RemoteClient
from .repositories import (
    RemoteActivityRepository, RemoteComplaintRepository, RemoteFeeRepository,
    RemoteNoticeRepository, RemoteProfileRepository, RemoteRoomRepository,
    RemoteStudentRepository, RemoteVisitorRepository,
)


def build_remote_backend(
    url: str,
    anon_key: str,
    service_key: str = "",
    timeout: Optional[float] = None,
    http: Optional[requests.Session] = None,
) -> Backend:
    client = RemoteClient(url, anon_key, service_key=service_key, timeout=timeout, http=http)
    return Backend(
        auth=RemoteAuthService(client),
        profiles=RemoteProfileRepository(client),
        students=RemoteStudentRepository(client),
        rooms=RemoteRoomRepository(client),
        fees=RemoteFeeRepository(client),
        visitors=RemoteVisitorRepository(client),
        complaints=RemoteComplaintRepository(client),
        notices=RemoteNoticeRepository(client),
        activity=RemoteActivityRepository(client),
    )
