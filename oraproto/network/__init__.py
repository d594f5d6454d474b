"""Message codec, server summaries and network security helpers."""