ATTRIBUTES_NAME = "__schema_attributes__"
DEPRECATED_NAME = "__deprecated__"
ENV_PREFIX = "TYPEDESC_"
RETURN_KEY = "return"
PRIVATE_PREFIX = "_"
NULLABLES = (None, type(None))
# ABCs declared in these modules only describe a capability, they are never a base.
INTERFACE_MODULES = frozenset(
    {"collections.abc", "_collections_abc", "typing", "typing_extensions", "abc"}
)
