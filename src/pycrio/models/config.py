"""Client configuration models."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from pycrio.utils.errors import ImageCommandParseError

DEFAULT_BIN_PATH = "/bin:/sbin:/usr/bin:/usr/sbin:/usr/local/bin:/home/kubernetes/bin"


class ImageCommand(str, Enum):
    """crictl sub-command used to list images."""

    IMG = "img"
    IMAGES = "images"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "ImageCommand":
        """Parse a sub-command name, ignoring case.

        Raises:
            ImageCommandParseError: If the text names no known sub-command
        """
        lowered = text.lower()
        for member in cls:
            if member.value == lowered:
                return member
        raise ImageCommandParseError()


def coerce_image_command(value: Any) -> Any:
    """Parse sub-command text, leaving enum members and other values alone."""
    if isinstance(value, str) and not isinstance(value, ImageCommand):
        return ImageCommand.parse(value)
    return value


# An ImageCommand field that also accepts text in any case
ImageCommandField = Annotated[ImageCommand, BeforeValidator(coerce_image_command)]


class ClientConfig(BaseModel):
    """Settings shared by every query issued through a client.

    Example:
        config = ClientConfig(config_path="/etc/crictl.yaml")
        config.append_bin_path("/opt/cri/bin")
    """

    model_config = ConfigDict(frozen=True)

    bin_path: str = Field(
        default=DEFAULT_BIN_PATH,
        description="Colon separated PATH used to locate crictl",
    )
    config_path: str | None = Field(
        default=None,
        description="crictl config file, passed through with -c",
    )
    image_command: ImageCommandField = Field(
        default=ImageCommand.IMG,
        description="Sub-command used to list images",
    )

    def append_bin_path(self, path: str) -> None:
        """Append a directory to ``bin_path``.

        A ``:`` separator is inserted unless ``path`` already starts with one.
        This is the only way to change a configuration after construction.
        """
        if not path.startswith(":"):
            path = f":{path}"
        # bypasses the frozen check
        object.__setattr__(self, "bin_path", f"{self.bin_path}{path}")
