import hjson
import os
from typing import Any, Callable


class IOUtils:
    """
    static class for IO-related utility functions.
    """

    def __init__(self):
        raise RuntimeError("This class is not meant to be initialized.")

    @staticmethod
    def file_exists(
        filepath: str,
        on_error_for_user: Callable[[str], Any],
        on_error_for_dev: Callable[[str], Any]
    ) -> bool:
        """
        :param filepath: Location of the file
        :param on_error_for_user:
            Function to supply with a publicly-viewable string (message viewable by end-user) in the event of an error.
        :param on_error_for_dev:
            Function to supply with a developer-friendly string (not by end-user) in the event of an error.
        :return: True if there is a file at the indicated location, otherwise False.
        """
        if not os.path.exists(filepath):
            on_error_for_user("The requested file does not exist.")
            on_error_for_dev(f"Specified filepath {filepath} does not exist.")
            return False
        if not os.path.isfile(filepath):
            on_error_for_user(
                "Filepath location exists but is not a file. "
                "Most likely a directory exists at that location.")
            on_error_for_dev(f"Specified filepath location {filepath} exists but is not a file.")
            return False
        return True

    @staticmethod
    def hjson_read(
        filepath: str,
        on_error_for_user: Callable[[str], Any],
        on_error_for_dev: Callable[[str], Any]
    ) -> dict | None:
        """
        :param filepath:
        :param on_error_for_user:
            Function to supply with a publicly-viewable string (message viewable by end-user) in the event of an error.
        :param on_error_for_dev:
            Function to supply with a developer-friendly string (not by end-user) in the event of an error.
        :return: Dictionary representing the (h)JSON data if successful, otherwise None
        """
        if not IOUtils.file_exists(
            filepath=filepath,
            on_error_for_user=on_error_for_user,
            on_error_for_dev=on_error_for_dev
        ):
            return None
        json_dict: Any
        try:
            with open(filepath, 'r', encoding='utf-8') as input_file:
                json_dict = hjson.load(input_file)
        except OSError as e:
            on_error_for_user("An unexpected file I/O error happened while reading a file.")
            on_error_for_dev(str(e))
            return None
        except hjson.HjsonDecodeError as e:
            on_error_for_user("The file could not be parsed as (h)JSON.")
            on_error_for_dev(f"Failed to parse {filepath}: {str(e)}")
            return None
        if not isinstance(json_dict, dict):
            on_error_for_user("The file does not contain a (h)JSON object.")
            on_error_for_dev(f"Expected a (h)JSON object at the top level of {filepath}.")
            return None
        return dict(json_dict)
