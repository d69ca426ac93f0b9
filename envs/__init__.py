from .base_env import BaseTestnetEnv, TestnetLiveEnv
from .basic_env import BasicEnv
from .testnet_env import TestnetEnv

__all__ = ["BaseTestnetEnv", "BasicEnv", "TestnetEnv", "TestnetLiveEnv"]
