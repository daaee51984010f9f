"""keyvo: key-value coding and key path observation for Python objects."""

from importlib.metadata import version as _version

__version__ = _version("keyvo")

from keyvo.errors import (
    KeyValueError,
    InvalidKeyError,
    MissingPathSegmentError,
    ObserverDeliveryError,
    DerivationError,
)
from keyvo.keypath import split_key_path
from keyvo.accessors import getter, predicate, setter
from keyvo.interfaces import KeyPathCoding, KeyedGetter, KeyedSetter, KeyPathObservable
from keyvo.coding import (
    KeyValueCoding,
    get_value_for_key,
    set_value_for_key,
    get_value_for_key_path,
    set_value_for_key_path,
)
from keyvo.stream import Stream, EventStream, Subscription
from keyvo.observing import (
    KeyValueObservable,
    announce,
    observable_for_key,
    observable_for_key_path,
    subscribe,
    subscribe_path,
    observer_count,
    has_observers,
)
from keyvo.deriving import KeyValueDeriving, derive_key_from_stream
from keyvo.store import KeyValueStore
from keyvo.config import set_error_handler

__all__ = [
    "KeyValueError",
    "InvalidKeyError",
    "MissingPathSegmentError",
    "ObserverDeliveryError",
    "DerivationError",
    "split_key_path",
    "getter",
    "predicate",
    "setter",
    "KeyPathCoding",
    "KeyedGetter",
    "KeyedSetter",
    "KeyPathObservable",
    "KeyValueCoding",
    "get_value_for_key",
    "set_value_for_key",
    "get_value_for_key_path",
    "set_value_for_key_path",
    "Stream",
    "EventStream",
    "Subscription",
    "KeyValueObservable",
    "announce",
    "observable_for_key",
    "observable_for_key_path",
    "subscribe",
    "subscribe_path",
    "observer_count",
    "has_observers",
    "KeyValueDeriving",
    "derive_key_from_stream",
    "KeyValueStore",
    "set_error_handler",
]
