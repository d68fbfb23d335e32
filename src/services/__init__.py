from services.asset_localizer import AssetLocalizer
from services.file_downloader import ProblemFileDownloader, problem_group

__all__ = ["AssetLocalizer", "ProblemFileDownloader", "problem_group"]
