from dataclasses import dataclass

from src.broker_api.core.services import Database


@dataclass
class ApplicationDependencies:
    database: Database
