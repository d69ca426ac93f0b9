from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Union


class ConfigBundle:
    """
    Immutable start configuration for one node.

    `params` are the string parameters handed to the node image, `files` are
    input files keyed by their path relative to the image's input directory.
    """

    __slots__ = ("_params", "_files")

    def __init__(self, params: Mapping[str, str] | None = None, files: Mapping[str, bytes] | None = None):
        self._params = MappingProxyType({k: str(v) for k, v in (params or {}).items()})
        self._files = MappingProxyType(dict(files or {}))

    @property
    def params(self) -> Mapping[str, str]:
        return self._params

    @property
    def files(self) -> Mapping[str, bytes]:
        return self._files

    def __contains__(self, key: str) -> bool:
        return key in self._params

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._params.get(key, default)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConfigBundle):
            return NotImplemented
        return dict(self._params) == dict(other._params) and dict(self._files) == dict(other._files)

    def __repr__(self) -> str:
        return f"ConfigBundle(params={dict(self._params)!r}, files={sorted(self._files)!r})"


BundleSource = Union[ConfigBundle, Mapping[str, object], Callable[[], Union[ConfigBundle, Mapping[str, object]]]]


def bundle(*sources: BundleSource) -> ConfigBundle:
    """
    Compose sources into one bundle, later sources win on key collision.

    Callables are evaluated in order; anything they raise propagates.
    """
    params: dict[str, str] = {}
    files: dict[str, bytes] = {}
    for source in sources:
        if callable(source):
            source = source()
        if isinstance(source, ConfigBundle):
            params.update(source.params)
            files.update(source.files)
        else:
            params.update({k: str(v) for k, v in source.items()})
    return ConfigBundle(params, files)
