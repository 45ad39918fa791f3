"""
Base Pydantic models for the beamsmear beam-file generator.

This module provides the foundational Pydantic model class shared by the
configuration and bookkeeping structures, together with the YAML helpers
used by the configuration file system.
"""

from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict
import yaml


class PhysicsBaseModel(BaseModel):
    """
    Base Pydantic model for all physics-related data structures in beamsmear.

    This model provides:
    - Strict validation with assignment checking
    - Rejection of unknown fields
    - Plain builtin dictionaries for YAML output

    Example:
        >>> class BunchParameters(PhysicsBaseModel):
        ...     energy: float = Field(gt=0, description="Beam energy in GeV")
        ...     particles: int = Field(gt=0, description="Number of macroparticles")

        >>> params = BunchParameters(energy=45.6, particles=1000)
        >>> params.energy
        45.6
    """

    model_config = ConfigDict(
        validate_assignment=True,        # Validate on attribute assignment
        extra="forbid",                  # Reject unknown fields
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Create instance from dictionary.

        Args:
            data: Dictionary with model field values

        Returns:
            Instance of the model
        """
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to a plain dictionary."""
        return self.model_dump()

    def to_yaml_dict(self) -> Dict[str, Any]:
        """
        Convert to YAML-compatible dictionary.

        Values are dumped in JSON mode so that ``yaml.safe_dump`` accepts
        the result.

        Returns:
            Dictionary suitable for YAML serialization
        """
        return self.model_dump(mode="json")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]):
        """
        Load an instance from a YAML file.

        Args:
            path: Path to a YAML file holding a mapping of field values

        Returns:
            Instance of the model

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not contain a mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> Path:
        """Write the model to a YAML file and return the path written."""
        path = Path(path)
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_yaml_dict(), f, sort_keys=False)
        return path
