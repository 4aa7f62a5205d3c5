"""Data models for opskit."""
from opskit.models.dns import RECORD_TYPES, DNSRecord, RecordType
from opskit.models.repository import RepositoryDescriptor, Secret, Variable

__all__ = [
    'RECORD_TYPES',
    'DNSRecord',
    'RecordType',
    'RepositoryDescriptor',
    'Secret',
    'Variable',
]
