"""
Core application engine for a single download run.

`DownloadSession` coordinates one run end to end, delegating the transfer
itself to the `Downloader`.
"""
