import flexitest


class TestnetTestRuntime(flexitest.TestRuntime):
    """
    Extended testenv. TestnetTestRuntime to call custom run context
    """

    __test__ = False

    def create_run_context(self, name: str, env: flexitest.LiveEnv) -> flexitest.RunContext:
        return TestnetRunContext(self.datadir_root, name, env)


class TestnetRunContext(flexitest.RunContext):
    """
    Custom run context which provides access to services, the started testnet
    and the prepared genesis artifacts.
    To be used by TestnetTestRuntime
    """

    __test__ = False

    def __init__(self, datadir_root: str, name: str, env: flexitest.LiveEnv):
        super().__init__(env)
        self.name = name
        self.datadir_root = datadir_root
        self.testnet = getattr(env, "testnet", None)
        self.prepared = getattr(env, "prepared", None)
