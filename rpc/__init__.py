import logging

import flexitest

from rpc.beacon import BeaconApiClient
from rpc.client import JsonrpcClient

logger = logging.getLogger(__name__)


def _status_checker(svc: flexitest.service.ProcService, name: str):
    def _status_ck(method: str):
        """
        Hook to check that the process is still running before every call.
        """
        if not svc.check_status():
            logger.warning(f"service '{name}' seems to have crashed as of call to {method}")
            raise RuntimeError(f"process '{name}' crashed")

    return _status_ck


def inject_service_create_rpc(svc: flexitest.service.ProcService, rpc_url: str, name: str):
    """
    Injects a `create_rpc` method using JSON-RPC onto a `ProcService`, checking
    its status before each call.
    """

    def _create_rpc() -> JsonrpcClient:
        rpc = JsonrpcClient(rpc_url)
        rpc._pre_call_hook = _status_checker(svc, name)
        return rpc

    svc.create_rpc = _create_rpc


def inject_service_create_beacon_api(svc: flexitest.service.ProcService, api_url: str, name: str):
    """
    Injects a `create_beacon_api` method onto a `ProcService`, same status
    check as `inject_service_create_rpc`.
    """

    def _create_beacon_api() -> BeaconApiClient:
        api = BeaconApiClient(api_url)
        api._pre_call_hook = _status_checker(svc, name)
        return api

    svc.create_beacon_api = _create_beacon_api
