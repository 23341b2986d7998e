"""
Core Module

Session/retry/poll orchestration for the MythX API

Components:
- AuthManager: login and token refresh requests
- TokenSession: holds the token pair, coalesces concurrent login/refresh
- AuthorizedRequestExecutor: one call with refresh-and-retry on 401
- AnalysisRecords: submit / status / issues / list endpoints
- AnalysisPoller: bounded status polling with an initial delay floor
- Client: composes all of the above
"""
