from dataclasses import dataclass, fields


@dataclass
class ContainorConfig:
    # entries shown by repr() before collapsing into '+N more'
    repr_limit: int = 10

    def __post_init__(self):
        if self.repr_limit < 0: raise ValueError("repr_limit must be non-negative")


settings = ContainorConfig()


def configure(**kwargs) -> ContainorConfig:
    """update the shared settings in place, returns them"""
    known = {f.name for f in fields(ContainorConfig)}
    for name in kwargs:
        if name not in known:
            raise AttributeError(f"unknown setting '{name}'")
    updated = ContainorConfig(**{**{n: getattr(settings, n) for n in known}, **kwargs})
    for name in known:
        setattr(settings, name, getattr(updated, name))
    return settings
