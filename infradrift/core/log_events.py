from dataclasses import dataclass

from infradrift.core.log import BaseLogEvent, EventName


@dataclass(frozen=True)
class LogEvent(BaseLogEvent):
    """Contains EventNames for logging."""

    LoadConfigStart: EventName
    LoadConfigEnd: EventName

    ReadManifestStart: EventName
    ReadManifestEnd: EventName
    ReadManifestError: EventName
    ReadManifestJSONFallback: EventName

    GenerateManifestStart: EventName
    GenerateManifestEnd: EventName

    ScanInfraStart: EventName
    ScanInfraEnd: EventName
    ScanInfraCancelled: EventName

    ScanAccountStart: EventName
    ScanAccountEnd: EventName
    ScanAccountNoMatch: EventName

    CheckResourceStart: EventName
    CheckResourceEnd: EventName
    CheckResourceError: EventName
    CheckResourceUnsupported: EventName

    CheckerLoaded: EventName
    CheckerCacheCleared: EventName

    ClientCreated: EventName
