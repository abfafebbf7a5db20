"""Global configuration: defaults, constants, host command names."""

# Default rule configuration produced by ``Volume3dRule.create_rule``
DEFAULT_FILTER = "$type_3 = SmdxVolume3d"
DEFAULT_FIELD = "volume"
DEFAULT_TOLERANCE = 1.0

# Allowed range for the tolerance editor (percent)
TOLERANCE_MIN = 0.0
TOLERANCE_MAX = 100.0

# Geometry element type tag carrying a solid volume
MODEL3D_TYPE = "model3d"

# Typed properties whose key starts with this marker are internal
INTERNAL_PREFIX = "$"

# Key of the default layer in every drawing's layer registry
DEFAULT_LAYER_KEY = "layer0"

# Host operations used by diagnostic activation
LAYER_ACTIVATE_COMMAND = "ru.albatros.wdx/wdx:layers:activate"
LAYER_SELECT_BROADCAST = "wdx:onView:layers:select"

# Locale used when no translator locale is configured
DEFAULT_LOCALE = "en"
