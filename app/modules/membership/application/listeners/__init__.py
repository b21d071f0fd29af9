# 📄 File: app/modules/membership/application/listeners/__init__.py
# 🧭 Purpose (Layman Explanation):
# Background workers reacting to messages from the queues.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the queue listeners.
# 🔗 Dependencies:
# listener modules
# 🔄 Connected Modules / Calls From:
# app.modules.membership.container

from .club_listeners import ClubRequestListener
from .tournament_listeners import TournamentRegistrationListener

__all__ = ["ClubRequestListener", "TournamentRegistrationListener"]
