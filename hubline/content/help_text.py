"""
Help text for the hubline shell.

Three tables, all plain data:
- COMMAND_DOCS: usage and description per command (/help <command>)
- SETTING_DOCS: type and description per setting (/help set <key>)
- KEY_DOCS: key bindings per screen (/help keys <section>)

Every `color_*` setting shares the single "color_*" entry.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


NO_DOCUMENTATION = "No documentation available."


@dataclass(frozen=True)
class CommandDoc:
    name: str
    args: Optional[str]
    summary: str
    description: Optional[str] = None


@dataclass(frozen=True)
class SettingDoc:
    name: str
    hub: bool  # also settable per hub
    type: str
    description: str


@dataclass(frozen=True)
class KeyDoc:
    section: str
    title: str
    bindings: str


# =============================================================================
# Commands
# =============================================================================

_SEARCH_HELP = """\
Sends a file search and opens a tab for the results.

Options:

  -hub      Only search the current hub (default).
  -all      Search every connected hub that does not have `chat_only' set.
  -le  <s>  Files must be smaller than <s>.
  -ge  <s>  Files must be larger than <s>.
  -t   <t>  Files must be of type <t> (see below).
  -tth <h>  Files must have TTH root <h>.
  --        Treat everything after this as search terms.

Sizes take an optional K, M or G suffix (KiB, MiB, GiB).

File types for -t:

  1  any      Anything, including directories (default).
  2  audio    Audio files.
  3  archive  Compressed archives.
  4  doc      Text documents.
  5  exe      Windows executables.
  6  img      Images.
  7  video    Video files.
  8  dir      Directories only.

Types are matched on file extension only."""

_COMMANDS: Tuple[CommandDoc, ...] = (
    CommandDoc(
        "accept", None, "Accept a hub's new TLS certificate.",
        "When an encrypted hub presents a certificate whose keyprint differs from"
        " the stored one, the connection is refused. Use this command on the hub"
        " tab to trust the new keyprint and reconnect.",
    ),
    CommandDoc(
        "browse", "[[-f] <user>]", "Browse a file list.",
        "Without arguments, opens your own file list. With a user, downloads that"
        " user's list (unless it is cached) and opens it once it arrives. `-f'"
        " forces a fresh download.",
    ),
    CommandDoc(
        "clear", None, "Clear the current tab's log.",
        "Only the log on screen is cleared; log files are left alone.",
    ),
    CommandDoc(
        "close", None, "Close the current tab.",
        "Closing a hub tab disconnects from the hub and also closes the private"
        " message tabs that belong to it. The main tab cannot be closed.",
    ),
    CommandDoc(
        "connect", "[<address>]", "Connect to a hub.",
        "Connects the current hub tab. Without an address, the address used last"
        " on this tab is reused. Addresses look like `protocol://host:port/' or"
        " just `host:port'; the port defaults to 411 and the protocol to dchub."
        " Known protocols: dchub, nmdc, nmdcs, adc, adcs. For nmdcs and adcs hubs"
        " a known keyprint may be appended as `?kp=SHA256/<base32>'.\n\n"
        "Only works on hub tabs; use /open to create one first:\n\n"
        "  /open testhub\n"
        "  /connect dchub://hub.example.org/",
    ),
    CommandDoc("connections", None, "Open the connections tab."),
    CommandDoc("delhub", "<name>", "Forget a hub's configuration."),
    CommandDoc(
        "disconnect", None, "Disconnect from a hub.",
        "On a hub tab, disconnects that hub. On the main tab, disconnects every hub.",
    ),
    CommandDoc(
        "gc", None, "Clean up stored data.",
        "Removes hash data that no longer belongs to a shared file, along with"
        " stale cached file lists. Running it once a month or so is plenty.",
    ),
    CommandDoc(
        "grant", "[-list|<user>]", "Grant someone a slot.",
        "A granted user may download from you even when all slots are taken,"
        " until the grant is revoked with /ungrant.\n\n"
        "`/grant' without arguments, or with `-list', lists current grants. On a"
        " private message tab, `/grant' without arguments grants the user you are"
        " talking to, so use `-list' there.\n\n"
        "Grants are per hub: the same person on another hub is a different user.",
    ),
    CommandDoc(
        "help", "[<command>|set <key>|keys [<section>]]", "Show help on commands, settings and keys.",
        "/help                 list all commands\n"
        "/help <command>       help on one command\n"
        "/help set <setting>   help on a setting\n"
        "/help keys            help on key bindings",
    ),
    CommandDoc(
        "hset", "[<key> [<value>]]", "Get or set per-hub settings.",
        "Works like /set, but on the settings of the current hub. Only available"
        " on hub tabs. /hunset reverts a setting to its global value.",
    ),
    CommandDoc(
        "hunset", "[<key>]", "Revert a per-hub setting.",
        "Removes the hub's own value so the global value applies again.",
    ),
    CommandDoc(
        "kick", "<user>", "Kick a user from the hub.",
        "NMDC hubs only, and you need to be an operator.",
    ),
    CommandDoc("listen", None, "List the ports hubline is listening on."),
    CommandDoc(
        "me", "<message>", "Chat in the third person.",
        "Most clients show the message as `** Nick <message>'. Only ADC hubs"
        " support this; on NMDC hubs the text is sent as-is, /me included.",
    ),
    CommandDoc(
        "msg", "<user> [<message>]", "Send a private message.",
        "Opens a private message tab with a user on the current hub, and sends"
        " the message if one is given.",
    ),
    CommandDoc("nick", "[<nick>]", "Same as `/hset nick' on hub tabs and `/set nick' elsewhere."),
    CommandDoc(
        "open", "[-n] [<name>] [<address>]", "Open a hub tab and connect.",
        "Without arguments, lists the hubs in the configuration. Otherwise opens"
        " (or selects) the tab for hub <name>. The name is your own short label"
        " for the hub and keys its settings.\n\n"
        "If an address is given, or one is stored for this name, the hub is"
        " connected right away. `-n' skips connecting.\n\n"
        "See /connect for the address format.",
    ),
    CommandDoc(
        "password", "<password>", "Send a password to the hub.",
        "Logs in with a password without storing it. To log in automatically,"
        " store it with `/hset password <password>' instead; note that stored"
        " passwords are kept in plain text.",
    ),
    CommandDoc("pm", "<user> [<message>]", "Alias for /msg."),
    CommandDoc("queue", None, "Open the download queue."),
    CommandDoc("quit", None, "Quit hubline."),
    CommandDoc(
        "reconnect", None, "Disconnect and connect again.",
        "Useful after changing your nick or the hub encoding. On the main tab,"
        " every connected hub is reconnected.",
    ),
    CommandDoc(
        "refresh", "[<path>]", "Refresh your share.",
        "Without arguments the whole share is rescanned. A path limits the"
        " refresh to one directory; both filesystem paths and virtual share"
        " paths are accepted.",
    ),
    CommandDoc(
        "say", "<message>", "Send a chat message.",
        "Sends a message to the current hub or user. Any line that does not start"
        " with `/' is sent this way, so you rarely need the command itself. It is"
        " handy for messages that start with a slash:\n\n"
        "  /say /help is what you want",
    ),
    CommandDoc("search", "[options] <query>", "Search for files.", _SEARCH_HELP),
    CommandDoc(
        "set", "[<key> [<value>]]", "Get or set global settings.",
        "Without arguments, lists all global settings and their values. A"
        " glob-style pattern lists matching settings, e.g. `/set color*'. With a"
        " key only, shows that setting; with a value, changes it.\n\n"
        "/unset reverts a setting to its default; /hset manages per-hub values."
        " Changes are saved immediately.\n\n"
        "Use `/help set <key>' for help on a setting.",
    ),
    CommandDoc(
        "share", "[<name> <path>]", "Share a directory.",
        "Without arguments, lists shared directories. Otherwise shares <path>"
        " under the public name <name>. The name may be quoted or escaped:\n\n"
        "  /share \"Fun Stuff\" /path/to/fun/stuff\n"
        "  /share Fun\\ Stuff /path/to/fun/stuff\n\n"
        "Only the name is visible to others. The new directory is hashed right away.",
    ),
    CommandDoc("ungrant", "[<user>]", "Revoke a granted slot."),
    CommandDoc(
        "unset", "[<key>]", "Revert a global setting.",
        "Resets a global setting to its default value.",
    ),
    CommandDoc(
        "unshare", "[<name>]", "Stop sharing a directory.",
        "`/unshare <name>' removes one directory, `/unshare /' removes all.\n\n"
        "Hash data of removed files is kept so re-adding them is quick. Use /gc"
        " to clean it up.",
    ),
    CommandDoc("userlist", None, "Open the user list of the current hub."),
    CommandDoc("version", None, "Show version information."),
    CommandDoc("whois", "<user>", "Find a user in the user list."),
)

COMMAND_DOCS: Dict[str, CommandDoc] = {doc.name: doc for doc in _COMMANDS}


# =============================================================================
# Settings
# =============================================================================

_COLOR_HELP = """\
The `color_' settings control the interface colors:

  list_default  - normal list item
  list_header   - list header
  list_select   - selected list item
  log_default   - normal log text
  log_time      - time prefix of log lines
  log_nick      - nicks
  log_highlight - nick of a line that mentions you
  log_ownnick   - your own nick
  log_join      - join messages
  log_quit      - quit messages
  separator     - list footer bar
  tab_active    - the selected tab
  tabprio_low   - tab with low priority activity
  tabprio_med   - tab with medium priority activity
  tabprio_high  - tab with high priority activity
  title         - title bar

A value is a comma-separated list: the first color is the foreground, the
second the background, plus any attributes. Missing colors use the
terminal default.
Colors: black, blue, cyan, default, green, magenta, red, white, yellow.
Attributes: blink, bold, reverse, underline."""

_SETTINGS: Tuple[SettingDoc, ...] = (
    SettingDoc("active", True, "<boolean>",
               "Use active mode. Your router or firewall may need to forward the"
               " ports; see `active_ip' and `active_port'."),
    SettingDoc("active_ip", True, "<string>",
               "Public IP address for active mode. When unset, the address is"
               " learned from the hub. Give an IPv4 and an IPv6 address separated"
               " by a comma to set both. `local' uses the address of the network"
               " interface that connects to the hub, which is only right when"
               " there is no NAT in between."),
    SettingDoc("active_port", True, "<integer>",
               "Port for incoming connections in active mode; 0 picks a random"
               " port. Also used for UDP unless `active_udp_port' is set."),
    SettingDoc("active_udp_port", True, "<integer>",
               "Port for incoming UDP in active mode. Defaults to `active_port'."),
    SettingDoc("adc_blom", True, "<boolean>",
               "Support the BLOM extension on ADC hubs, trading some CPU for less"
               " hub traffic. Takes effect after a reconnect."),
    SettingDoc("autoconnect", True, "<boolean>",
               "Connect to this hub when hubline starts."),
    SettingDoc("autorefresh", False, "<interval>",
               "Time between automatic share refreshes, with s, m, h or d"
               " suffixes. 0 disables automatic refreshing; otherwise at least"
               " ten minutes."),
    SettingDoc("backlog", True, "<integer>",
               "Number of lines loaded from the log file when a hub or private"
               " message tab opens. Private message tabs use the global value."),
    SettingDoc("chat_only", True, "<boolean>",
               "Mark a hub as chat only. `/search -all' skips such hubs."),
    SettingDoc("color_*", False, "<color>", _COLOR_HELP),
    SettingDoc("connection", True, "<string>",
               "Your upload speed as shown to other users: a plain number for"
               " Mbit/s or a value like `2300 KiB/s'. Ignored when `upload_rate'"
               " is set."),
    SettingDoc("description", True, "<string>",
               "Short public description shown in hub user lists."),
    SettingDoc("disconnect_offline", True, "<boolean>",
               "Drop transfers with users who are no longer on a shared hub."),
    SettingDoc("download_dir", False, "<path>",
               "Where finished downloads are moved."),
    SettingDoc("download_exclude", False, "<regex>",
               "Names matching this expression are skipped when a whole"
               " directory is queued for download."),
    SettingDoc("download_rate", False, "<speed>",
               "Limit on the combined download speed. Suffixes G, M and K mean"
               " GiB/s, MiB/s and KiB/s."),
    SettingDoc("download_segment", False, "<size>",
               "Minimum segment size when downloading from several users; values"
               " below 1 MiB are raised to 1 MiB. 0 disables segmented downloads."),
    SettingDoc("download_shared", False, "<boolean>",
               "Whether files already in your share may be queued for download."),
    SettingDoc("download_slots", False, "<integer>",
               "Maximum number of downloads at once."),
    SettingDoc("email", True, "<string>",
               "Email address shown in hub user lists."),
    SettingDoc("encoding", True, "<string>",
               "Character encoding of NMDC hub chat and private messages, for"
               " example cp1252, cp1251, iso8859-7, koi8-r or utf-8. ADC always"
               " uses UTF-8."),
    SettingDoc("filelist_maxage", False, "<interval>",
               "How long downloaded file lists are kept before they are fetched"
               " again. 0 disables the cache."),
    SettingDoc("flush_file_cache", False, "<none|upload|download|hash>[,...]",
               "Ask the OS to drop file contents from its cache after hashing,"
               " uploading or downloading them."),
    SettingDoc("geoip_cc", False, "<path>|disabled",
               "Path to a GeoIP2 country database, or `disabled'."),
    SettingDoc("hash_rate", False, "<speed>",
               "Limit on hashing speed, in the same format as `download_rate'."),
    SettingDoc("hubname", True, "<string>",
               "The name of this hub tab, as given to /open. Only used locally."),
    SettingDoc("incoming_dir", False, "<path>",
               "Where incomplete downloads are kept."),
    SettingDoc("local_address", True, "<string>",
               "Local interface address(es) to bind to, IPv4 and IPv6 separated"
               " by a comma."),
    SettingDoc("log_debug", False, "<boolean>",
               "Write debug messages to the log file."),
    SettingDoc("log_downloads", False, "<boolean>",
               "Log finished downloads."),
    SettingDoc("log_hubchat", True, "<boolean>",
               "Log the main hub chat. Reopen the hub tab for a change to apply."),
    SettingDoc("log_uploads", False, "<boolean>",
               "Log finished uploads."),
    SettingDoc("max_ul_per_user", True, "<integer>",
               "Maximum number of uploads to one user at once."),
    SettingDoc("minislots", False, "<integer>",
               "Number of minislots: extra slots for file lists and small files"
               " once all regular slots are in use. See `minislot_size'."),
    SettingDoc("minislot_size", False, "<integer>",
               "Largest file, in KiB, that may be downloaded through a minislot."),
    SettingDoc("nick", True, "<string>",
               "Your nick. Connected hubs only see a change after /reconnect."),
    SettingDoc("notify_bell", False, "<disabled|low|medium|high>",
               "Ring the terminal bell for tab notifications of at least this"
               " priority. High is for messages to you, medium for hub chat and"
               " low for joins, quits and search results."),
    SettingDoc("password", True, "<string>",
               "Password sent automatically when logging in to this hub. Stored"
               " in plain text; use /password to log in without storing it."),
    SettingDoc("reconnect_timeout", True, "<interval>",
               "Delay before reconnecting to a hub that dropped. 0 disables"
               " automatic reconnecting."),
    SettingDoc("sendfile", False, "<boolean>",
               "Use sendfile() for uploads where available."),
    SettingDoc("share_emptydirs", False, "<boolean>",
               "Share empty directories. Needs a refresh to apply."),
    SettingDoc("share_exclude", False, "<regex>",
               "Files and directories matching this expression are not shared."
               " Needs a refresh to apply."),
    SettingDoc("share_hidden", False, "<boolean>",
               "Share files and directories whose name starts with a dot."),
    SettingDoc("share_symlinks", False, "<boolean>",
               "Follow symlinks in shared directories, even out of the share."),
    SettingDoc("show_free_slots", True, "<boolean>",
               "Prefix your description with the number of free slots."),
    SettingDoc("show_joinquit", True, "<boolean>",
               "Show join and quit messages in hub chat."),
    SettingDoc("slots", False, "<integer>",
               "Number of upload slots. See also `minislots' and /grant."),
    SettingDoc("sudp_policy", False, "<disabled|allow|prefer>",
               "Encryption of UDP search results on ADCS hubs. `allow' encrypts"
               " when asked; `prefer' also asks others to encrypt."),
    SettingDoc("tls_policy", True, "<disabled|allow|prefer>",
               "TLS for client connections. `allow' uses it when the other side"
               " asks; `prefer' also asks for it. Hub TLS is not affected."),
    SettingDoc("tls_priority", False, "<string>",
               "TLS priority string for all encrypted connections."),
    SettingDoc("ui_time_format", False, "<string>",
               "strftime format of the clock in the status bar; `-' hides it."),
    SettingDoc("upload_rate", False, "<speed>",
               "Limit on the combined upload speed. Overrides `connection'."),
)

SETTING_DOCS: Dict[str, SettingDoc] = {doc.name: doc for doc in _SETTINGS}


def setting_doc(name: str) -> Optional[SettingDoc]:
    """Doc entry for a setting; all color_* names share one entry."""
    if name.startswith("color_"):
        name = "color_*"
    return SETTING_DOCS.get(name)


# =============================================================================
# Key bindings
# =============================================================================

_LIST_KEYS = (
    "Up/Down      Move the selection one item.\n"
    "k/j          Move the selection one item.\n"
    "PgUp/PgDown  Move the selection one page.\n"
    "Home/End     Select the first/last item.\n"
)

_FIND_KEYS = (
    "/            Incremental regex search (Return stops editing).\n"
    ",/.          Next/previous match.\n"
)

_KEYS: Tuple[KeyDoc, ...] = (
    KeyDoc("global", "Global key bindings",
           "Alt+j/Alt+k  Previous/next tab.\n"
           "Alt+h/Alt+l  Move the tab left/right.\n"
           "Alt+a        Jump to a tab with recent activity.\n"
           "Alt+<num>    Jump to tab <num>.\n"
           "Alt+c        Close the tab.\n"
           "Alt+n        Connections tab.\n"
           "Alt+q        Download queue.\n"
           "Alt+o        Own file list.\n"
           "Alt+r        Refresh the share.\n"
           "\n"
           "In tabs with a log:\n"
           "Ctrl+l       Clear the log.\n"
           "PgUp/PgDown  Scroll the log.\n"
           "\n"
           "In the input line:\n"
           "Tab          Complete the command, nick or argument.\n"
           "Up/Down      Command history.\n"
           "Alt+b/Alt+f  Word backward/forward.\n"
           "Ctrl+w       Delete the previous word.\n"
           "Alt+d        Delete the next word.\n"
           "Ctrl+k       Delete to the end of the line.\n"
           "Ctrl+u       Delete the line."),
    KeyDoc("browse", "File browser",
           _LIST_KEYS + _FIND_KEYS +
           "Right/l      Enter the directory.\n"
           "Left/h       Go to the parent directory.\n"
           "t            Toggle directories first.\n"
           "s/n          Sort by size/name.\n"
           "d            Queue the selection for download.\n"
           "m/M          Match the selection/whole list against the queue.\n"
           "a            Search for alternative sources."),
    KeyDoc("connections", "Connection list",
           _LIST_KEYS +
           "d            Disconnect.\n"
           "i/Return     Toggle the info box.\n"
           "f            Find the user in the user list.\n"
           "m            Message the user.\n"
           "q            Find the file in the download queue.\n"
           "b/B          Browse the user's list (B forces a download)."),
    KeyDoc("queue", "Download queue",
           _LIST_KEYS +
           "K/J          Previous/next user.\n"
           "f            Find the user in the user list.\n"
           "c            Find the connection.\n"
           "a            Search for alternative sources.\n"
           "d            Remove the file from the queue.\n"
           "+/-          Raise/lower the priority.\n"
           "i/Return     Toggle the user list.\n"
           "r/R          Remove the user from this file/all files.\n"
           "x/X          Clear the user's error for this file/all files.\n"
           "\n"
           "An item marked ERR can be removed with `d' or retried by raising"
           " its priority with `+'."),
    KeyDoc("search", "Search results",
           _LIST_KEYS +
           "f            Find the user in the user list.\n"
           "b/B          Browse the user's list (B forces a download).\n"
           "d            Queue the file for download.\n"
           "h            Toggle the hub column.\n"
           "u/s/l/n      Sort by user/size/free slots/name.\n"
           "m/M          Match the selection/all results against the queue.\n"
           "q/Q          Match the selected/all users' lists against the queue.\n"
           "a            Search for alternative sources."),
    KeyDoc("userlist", "User list",
           _LIST_KEYS + _FIND_KEYS +
           "o            Toggle operators first.\n"
           "s/S          Sort by share size.\n"
           "u/U          Sort by nick.\n"
           "t/T e/E c/C p/P  Toggle/sort the tag, email, connection and IP columns.\n"
           "i/Return     Toggle the info box.\n"
           "m            Message the user.\n"
           "g            Grant the user a slot.\n"
           "b/B          Browse the user's list (B forces a download).\n"
           "q            Match the user's list against the queue."),
)

KEY_DOCS: Dict[str, KeyDoc] = {doc.section: doc for doc in _KEYS}
