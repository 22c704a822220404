from dataclasses import dataclass

from src.directory.core.services import DbSessionService, SequenceGuardian


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    sequence_guardian: SequenceGuardian
