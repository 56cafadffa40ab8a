import shutil
from pathlib import Path


def get_name():
    return "Python copy worker"


def get_short_description():
    return "Copy files to a destination directory"


def get_description():
    return """Example script module for pyworker.
Copies every source path into the destination directory and reports progress
after each file."""


def get_version():
    return "0.1.0"


def get_parameters():
    return [
        {
            "label": "Source paths",
            "identifier": "source_paths",
            "kind": ["array_of_strings"],
            "required": True,
        },
        {
            "label": "Destination directory",
            "identifier": "destination_directory",
            "kind": ["string"],
            "required": True,
        },
        {
            "label": "Overwrite existing files",
            "identifier": "overwrite",
            "kind": ["boolean"],
        },
    ]


def process(handle, parameters):
    sources = parameters["source_paths"]
    destination = Path(parameters["destination_directory"])
    overwrite = parameters.get("overwrite", False)

    destination.mkdir(parents=True, exist_ok=True)
    destination_paths = []
    for index, source in enumerate(sources, start=1):
        target = destination / Path(source).name
        if target.exists() and not overwrite:
            raise FileExistsError(str(target))
        shutil.copyfile(source, target)
        destination_paths.append(str(target))
        handle.report_progress(index * 100 // len(sources))

    return destination_paths
