from functools import partial

from mypy.plugin import Plugin
from mypy.plugins import attrs
from packaging import version

_INJECT_DEFINE_FUNC = "depkit.inject_attrs.inject_define"


class DepkitMypyPlugin(Plugin):
    """
    Lets mypy treat depkit.define (inject_define) exactly like attr.define, so
    the generated __init__ of an injected component is type checked.

    Mirrors how mypy registers attr.define in mypy/plugins/default.py.
    """

    def get_class_decorator_hook(self, fullname: str):
        if fullname == _INJECT_DEFINE_FUNC:
            return attrs.attr_tag_callback
        return None

    def get_class_decorator_hook_2(self, fullname: str):
        if fullname == _INJECT_DEFINE_FUNC:
            return partial(
                attrs.attr_class_maker_callback, auto_attribs_default=None, slots_default=False
            )
        return None


def plugin(mypy_version: str):
    if version.parse(mypy_version) < version.parse("1.5.0"):
        raise ValueError(
            "mypy version must be at least 1.5.0 to use the depkit plugin. "
            f"You are using version {mypy_version}"
        )

    return DepkitMypyPlugin
