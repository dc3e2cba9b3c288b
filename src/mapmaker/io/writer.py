"""Map writer for saving processed maps."""

import json
from pathlib import Path

from mapmaker.domain import MapData
from mapmaker.exceptions import MapSaveError


class MapWriter:
    """Saves processed maps as JSON.

    The output holds the input document plus the computed label points,
    validity flags and army values.

    Example:
        writer = MapWriter(Path("europe-processed.json"))
        writer.save(map_data)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the processed map will be saved
        """
        self._output_path = output_path

    def save(self, map_data: MapData) -> None:
        """Save the map.

        Raises:
            MapSaveError: If the file cannot be written
        """
        try:
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(map_data.to_dict(), f, indent=2)
        except OSError as e:
            raise MapSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_processed_path(input_path: Path) -> Path:
        """Generate output path with -processed suffix.

        Args:
            input_path: Path to the input map description

        Returns:
            Path with -processed suffix (e.g., europe.json -> europe-processed.json)
        """
        return input_path.with_stem(f"{input_path.stem}-processed")
