from dataclasses import dataclass, field

from passgenx.config.config_vault import DEFAULT_IDENTIFIER, PASS_DEFAULTS
from .password_generator import generate


@dataclass(frozen=True)
class GenerationRequest:
    """
    Everything needed to derive one password.

    Built by the caller and thrown away after use; never persisted.
    """
    domain: str
    master_secret: str = field(repr=False)
    identifier: str = DEFAULT_IDENTIFIER
    length: int = PASS_DEFAULTS["length"]
    case_type: str = PASS_DEFAULTS["case_type"]
    include_digits: bool = PASS_DEFAULTS["include_digits"]
    include_symbols: bool = PASS_DEFAULTS["include_symbols"]

    def __post_init__(self):
        """
        Validate required fields and fill in the default identifier.

        The domain is kept exactly as given, since it feeds the seed; a
        blank domain or an empty master secret is rejected.
        """
        if not isinstance(self.domain, str):
            raise TypeError("Domain must be a string")
        if not isinstance(self.master_secret, str):
            raise TypeError("Master secret must be a string")

        if not self.domain.strip():
            raise ValueError("Domain cannot be empty")
        if not self.master_secret:
            raise ValueError("Master secret cannot be empty")

        if not self.identifier:
            object.__setattr__(self, "identifier", DEFAULT_IDENTIFIER)

    def generate(self) -> str:
        return generate(
            self.domain,
            self.master_secret,
            self.identifier,
            self.length,
            self.case_type,
            self.include_digits,
            self.include_symbols,
        )
