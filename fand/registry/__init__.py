from fand.registry.base import ProfileBuilder, build, get, profile_ids, register

__all__ = ["ProfileBuilder", "build", "get", "profile_ids", "register"]
