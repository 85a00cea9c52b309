"""Task definitions for this repository: invoke list-flavors, invoke generate-gradle, ..."""

from flavorizr import namespace
