from .channel_query_tool import ChannelQueryTool, QueryChannelsInput, QueryChannelsOutput

__all__ = [
    "ChannelQueryTool",
    "QueryChannelsInput",
    "QueryChannelsOutput",
]
