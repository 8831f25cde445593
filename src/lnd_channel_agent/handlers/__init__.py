"""
Channel query handling: data acquisition, enrichment, scoring and dispatch.

Import ChannelQueryHandler from handlers.channel_query_handler; this package
init stays empty because the formatters depend on handlers.channel_health.
"""
