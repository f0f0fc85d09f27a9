#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Contract Classes

Defines the foundation for pipeline input contracts.
Contracts are immutable, serializable, and validatable.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import json
import hashlib


class ContractError(Exception):
    """Base error for contract violations"""
    pass


class ContractValidationError(ContractError):
    """Raised when contract validation fails"""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Contract validation failed: {errors}")


class BaseContract(ABC):
    """
    Abstract base class for pipeline contracts.

    All contracts must:
    1. Be serializable to JSON
    2. Be deserializable from JSON
    3. Be validatable
    """

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert contract to dictionary"""
        pass

    def to_json(self, indent: int = 2) -> str:
        """Convert contract to JSON string"""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseContract':
        """Create contract from dictionary"""
        pass

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseContract':
        """Create contract from JSON string"""
        data = json.loads(json_str)
        return cls.from_dict(data)

    @abstractmethod
    def validate(self) -> List[str]:
        """
        Validate contract.
        Returns list of validation errors (empty if valid).
        """
        pass

    def is_valid(self) -> bool:
        """Check if contract is valid"""
        return len(self.validate()) == 0

    def assert_valid(self) -> None:
        """Raise error if contract is invalid"""
        errors = self.validate()
        if errors:
            raise ContractValidationError(errors)

    def checksum(self) -> str:
        """Stable short hash of the serialized contract"""
        json_str = json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(json_str.encode()).hexdigest()[:16]

    def __repr__(self) -> str:
        """String representation"""
        return f"<{self.__class__.__name__}(checksum={self.checksum()})>"
