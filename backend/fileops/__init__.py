from .paths import resolve, relative_to_root
from .ranges import ByteRange, parse_range
from .catalog import FileEntry, FileInfo, FileListing, list_directory, file_info, mime_type_for
from .transfer import download, preview
from .batch import BatchOutcome, delete_many, move_many, copy_many
from .storage import save_uploads, delete_file, delete_directory, make_directory
