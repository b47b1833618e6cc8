"""Pattern registry: the error taxonomy expressed as data.

Each PatternGroup bundles one category, a human-readable context and the
regex sources that identify that failure family. Sources are compiled
case-insensitively through the pattern cache and matched against lowercased
messages.

Order inside a group is cosmetic. Order of PRIORITIZED_PATTERN_GROUPS is not:
the first group with any matching pattern wins, so a message mentioning both
a timeout and a locator resolves to TIMEOUT.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from failtriage.core.constants import NOT_FOUND_CONTEXT

from .codes import ErrorCategory


@dataclass(frozen=True)
class PatternGroup:
    """A named bundle of one category, its context label and regex sources."""

    category: ErrorCategory
    context: str
    patterns: tuple[str, ...]


# =============================================================================
# Browser and page
# =============================================================================

BROWSER_GROUP = PatternGroup(
    ErrorCategory.BROWSER,
    "Browser Error",
    (
        r"\bbrowser\s+(?:closed|crashed|disconnected|has\s+been\s+closed)\b",
        r"\b(?:chromium|firefox|webkit)\s+(?:error|crashed|failed)\b",
        r"\bbrowser\s+context\s+(?:closed|invalid|lost)\b",
        r"\bbrowser\s+(?:process|instance)\s+(?:terminated|killed)\b",
        r"\bbrowser\s+(?:launch|startup)\s+failed\b",
    ),
)

PAGE_GROUP = PatternGroup(
    ErrorCategory.PAGE,
    "Page Error",
    (
        r"\bpage\s+(?:closed|crashed|has\s+been\s+closed)\b",
        r"\bpage\.goto\s+failed\b",
        r"\btarget\s+page\s+(?:closed|crashed|destroyed)\b",
        r"\bpage\s+navigation\s+failed\b",
        r"\bpage\s+(?:not\s+found|unavailable|unresponsive)\b",
        r"\bpage\s+(?:load|loading)\s+(?:failed|error|timeout)\b",
    ),
)

# =============================================================================
# Frames
# =============================================================================

FRAME_GROUP = PatternGroup(
    ErrorCategory.FRAME,
    "Frame Error",
    (
        r"\bframe\s+(?:detached|not\s+found|destroyed|invalid)\b",
        r"\bframe\.locator\s+failed\b",
        r"\bframe\s+(?:access|loading|content)\s+(?:error|denied|failed)\b",
        r"\bcross\s+frame\s+(?:error|access\s+denied|violation)\b",
        r"\bframe\s+(?:navigation|switch)\s+(?:failed|error)\b",
    ),
)

IFRAME_GROUP = PatternGroup(
    ErrorCategory.IFRAME,
    "IFrame Error",
    (
        r"\biframe\s+(?:error|not\s+accessible|not\s+found|blocked)\b",
        r"\biframe\s+(?:security|sandbox)\s+(?:error|violation|restriction)\b",
        r"\biframe\s+(?:load|loading)\s+(?:failed|error|timeout)\b",
        r"\biframe\s+(?:communication|interaction)\s+(?:failed|error)\b",
        r"\biframe\s+(?:content|document)\s+(?:not\s+available|access\s+denied)\b",
    ),
)

FRAME_TIMEOUT_GROUP = PatternGroup(
    ErrorCategory.FRAME_TIMEOUT,
    "Frame Timeout Error",
    (
        r"\bframe\s+(?:load|loading)\s+timeout\b",
        r"\biframe\s+(?:load|loading)\s+timeout\b",
        r"\bframe\s+(?:ready|available)\s+timeout\b",
        r"\bwait\s+for\s+frame\s+timeout\b",
        r"\bframe\s+(?:attach|detach)\s+timeout\b",
    ),
)

# =============================================================================
# Elements, locators and selectors
# =============================================================================

ELEMENT_GROUP = PatternGroup(
    ErrorCategory.ELEMENT,
    "Element Interaction Error",
    (
        r"\belement\s+(?:not\s+visible|not\s+attached|not\s+interactable|hidden)\b",
        r"\belement\s+is\s+(?:not\s+attached|hidden|disabled|readonly)\b",
        r"\bno\s+such\s+element\b",
        r"\belement\s+(?:not\s+found|missing|unavailable)\b",
        r"\belement\s+(?:stale|detached|destroyed)\b",
    ),
)

LOCATOR_GROUP = PatternGroup(
    ErrorCategory.LOCATOR,
    "Locator Error",
    (
        r"\blocator\.(?:fill|click|type|clear|hover)\s+failed\b",
        r"\blocator\s+(?:not\s+found|timed\s+out|invalid|empty)\b",
        r"\bwaiting\s+for\s+locator\b",
        r"\blocator\s+(?:timeout|error|exception)\b",
        r"\blocator\s+(?:resolved\s+to\s+(?:zero|multiple)|ambiguous)\b",
    ),
)

SELECTOR_GROUP = PatternGroup(
    ErrorCategory.SELECTOR,
    "Selector Error",
    (
        r"\binvalid\s+selector\b",
        r"\bselector\s+resolved\s+to\b",
        r"\bmalformed\s+selector\b",
        r"\bcss\s+selector\s+(?:error|invalid|syntax\s+error)\b",
        r"\bxpath\s+(?:error|invalid|syntax\s+error)\b",
        r"\bselector\s+(?:not\s+found|empty|null)\b",
    ),
)

ELEMENT_STATE_GROUP = PatternGroup(
    ErrorCategory.ELEMENT_STATE,
    "Element State Error",
    (
        r"\belement\s+(?:state|condition)\s+(?:invalid|unexpected|error|mismatch)\b",
        r"\belement\s+(?:not\s+in\s+expected\s+state|state\s+mismatch)\b",
        r"\belement\s+(?:disabled|hidden|readonly)\s+(?:state|error)\b",
        r"\belement\s+(?:enabled|visible|editable)\s+(?:check|validation)\s+failed\b",
        r"\belement\s+(?:not\s+clickable|not\s+selectable|not\s+editable)\b",
    ),
)

# =============================================================================
# Interaction
# =============================================================================

KEYBOARD_GROUP = PatternGroup(
    ErrorCategory.KEYBOARD,
    "Keyboard Error",
    (
        r"\bkeyboard\s+(?:error|failed|not\s+working|unavailable)\b",
        r"\bkey\s+(?:press|down|up)\s+(?:failed|error|timeout)\b",
        r"\btype\s+(?:failed|error|timeout)\b",
        r"\binput\s+method\s+(?:error|failed|not\s+supported)\b",
        r"\bkeyboard\s+(?:input|events)\s+(?:blocked|failed)\b",
    ),
)

MOUSE_GROUP = PatternGroup(
    ErrorCategory.MOUSE,
    "Mouse Error",
    (
        r"\bmouse\s+(?:error|failed|not\s+working|unavailable)\b",
        r"\bclick\s+(?:failed|error|not\s+working|intercepted)\b",
        r"\bmouse\s+(?:move|hover|drag)\s+(?:failed|error|timeout)\b",
        r"\bpointer\s+(?:events|error|blocked)\b",
        r"\bmouse\s+(?:button|wheel)\s+(?:error|failed)\b",
    ),
)

DRAG_DROP_GROUP = PatternGroup(
    ErrorCategory.DRAG_DROP,
    "Drag and Drop Error",
    (
        r"\bdrag\s+(?:and\s+)?drop\s+(?:failed|error|timeout)\b",
        r"\bdragstart\s+(?:failed|error|blocked)\b",
        r"\bdrop\s+(?:failed|error|not\s+allowed|rejected)\b",
        r"\bdraggable\s+(?:error|not\s+supported|disabled)\b",
        r"\bdrag\s+(?:operation|gesture)\s+(?:failed|cancelled)\b",
    ),
)

HOVER_GROUP = PatternGroup(
    ErrorCategory.HOVER,
    "Hover Error",
    (
        r"\bhover\s+(?:failed|error|not\s+working|timeout)\b",
        r"\bmouseover\s+(?:failed|error|blocked)\b",
        r"\bmouseenter\s+(?:failed|error|blocked)\b",
        r"\bhover\s+(?:state|effect)\s+(?:failed|error|not\s+triggered)\b",
        r"\bhover\s+(?:action|event)\s+(?:cancelled|interrupted)\b",
    ),
)

GESTURE_GROUP = PatternGroup(
    ErrorCategory.GESTURE,
    "Gesture Error",
    (
        r"\btouch\s+(?:gesture|event)\s+(?:failed|error|not\s+supported)\b",
        r"\bswipe\s+(?:failed|error|not\s+supported|timeout)\b",
        r"\bpinch\s+(?:zoom|gesture)\s+(?:failed|error|not\s+supported)\b",
        r"\bmulti\s+touch\s+(?:failed|error|not\s+supported)\b",
        r"\btouch\s+(?:screen|input)\s+(?:error|unavailable)\b",
    ),
)

# =============================================================================
# Waits, tabs, windows and contexts
# =============================================================================

WAIT_CONDITION_GROUP = PatternGroup(
    ErrorCategory.WAIT_CONDITION,
    "Wait Condition Error",
    (
        r"\bwait\s+(?:for|until)\s+(?:condition|state)\s+(?:failed|timeout|never\s+met)\b",
        r"\bwait\s+for\s+(?:element|text|attribute)\s+(?:failed|timeout)\b",
        r"\bexpected\s+condition\s+(?:not\s+met|failed|timeout|never\s+satisfied)\b",
        r"\bwait\s+condition\s+(?:never|not)\s+(?:satisfied|met|fulfilled)\b",
        r"\bwait\s+(?:for\s+)?(?:visible|hidden|enabled|disabled)\s+(?:failed|timeout)\b",
    ),
)

TAB_GROUP = PatternGroup(
    ErrorCategory.TAB,
    "Tab Error",
    (
        r"\btab\s+(?:switch|change|focus)\s+(?:failed|error|timeout)\b",
        r"\btab\s+(?:not\s+found|closed|invalid|destroyed)\b",
        r"\btab\s+(?:creation|opening)\s+(?:failed|error|blocked)\b",
        r"\bmultiple\s+tabs\s+(?:error|issue|conflict)\b",
        r"\btab\s+(?:handle|reference)\s+(?:invalid|lost|stale)\b",
    ),
)

WINDOW_GROUP = PatternGroup(
    ErrorCategory.WINDOW,
    "Window Error",
    (
        r"\bwindow\s+(?:switch|focus|resize)\s+(?:failed|error|timeout)\b",
        r"\bwindow\s+(?:not\s+found|closed|invalid|destroyed)\b",
        r"\bpopup\s+(?:window|blocked|error|failed)\b",
        r"\bwindow\s+(?:handle|reference)\s+(?:invalid|lost|stale)\b",
        r"\bmultiple\s+windows\s+(?:error|conflict)\b",
    ),
)

CONTEXT_GROUP = PatternGroup(
    ErrorCategory.CONTEXT,
    "Context Error",
    (
        r"\bbrowser\s+context\s+(?:error|invalid|closed|destroyed)\b",
        r"\bcontext\s+(?:switch|creation|management)\s+(?:failed|error)\b",
        r"\bisolated\s+context\s+(?:error|failed|not\s+available)\b",
        r"\bcontext\s+(?:not\s+found|expired|invalid|corrupted)\b",
        r"\bcontext\s+(?:isolation|security)\s+(?:error|violation)\b",
    ),
)

# =============================================================================
# Scroll and viewport
# =============================================================================

SCROLL_GROUP = PatternGroup(
    ErrorCategory.SCROLL,
    "Scroll Error",
    (
        r"\bscroll\s+(?:into\s+view\s+)?(?:failed|error|not\s+working|timeout)\b",
        r"\bscroll\s+(?:to\s+)?(?:element|position)\s+(?:failed|error|impossible)\b",
        r"\bscrollable\s+(?:area|container)\s+(?:not\s+found|error|unavailable)\b",
        r"\bscroll\s+(?:behavior|animation)\s+(?:failed|error|interrupted)\b",
        r"\bscroll\s+(?:position|offset)\s+(?:invalid|error)\b",
    ),
)

VIEWPORT_GROUP = PatternGroup(
    ErrorCategory.VIEWPORT,
    "Viewport Error",
    (
        r"\bviewport\s+(?:size|dimensions|resize)\s+(?:failed|error|invalid)\b",
        r"\bviewport\s+(?:not\s+set|invalid|error|mismatch)\b",
        r"\bscreen\s+resolution\s+(?:error|not\s+supported|mismatch)\b",
        r"\bdevice\s+viewport\s+(?:error|mismatch|not\s+supported)\b",
        r"\bviewport\s+(?:configuration|settings)\s+(?:failed|invalid)\b",
    ),
)

# =============================================================================
# Cookies, sessions and storage
# =============================================================================

COOKIE_GROUP = PatternGroup(
    ErrorCategory.COOKIE,
    "Cookie Error",
    (
        r"\bcookie\s+(?:failed|error|invalid|expired|blocked)\b",
        r"\bset\s+cookie\s+(?:failed|error|rejected)\b",
        r"\bcookie\s+(?:not\s+found|missing|unavailable)\b",
        r"\bcookie\s+(?:security|samesite|httponly)\s+(?:error|violation)\b",
        r"\bcookie\s+(?:domain|path)\s+(?:mismatch|error)\b",
    ),
)

SESSION_GROUP = PatternGroup(
    ErrorCategory.SESSION,
    "Session Error",
    (
        r"\bsession\s+(?:expired|invalid|not\s+found|timeout|destroyed)\b",
        r"\bsession\s+(?:failed|error|corrupted)\b",
        r"\bsession\s+(?:storage|management)\s+(?:error|failed)\b",
        r"\buser\s+session\s+(?:terminated|invalid|expired)\b",
        r"\bsession\s+(?:restore|recovery)\s+(?:failed|error)\b",
    ),
)

STORAGE_GROUP = PatternGroup(
    ErrorCategory.STORAGE,
    "Storage Error",
    (
        r"\b(?:localstorage|sessionstorage|indexeddb)\s+(?:error|failed|not\s+supported)\b",
        r"\bstorage\s+(?:quota|limit)\s+(?:exceeded|full|error)\b",
        r"\bweb\s+storage\s+(?:error|unavailable|disabled)\b",
        r"\bstorage\s+(?:access|permission)\s+(?:denied|blocked)\b",
        r"\bstorage\s+(?:corruption|integrity)\s+(?:error|check\s+failed)\b",
    ),
)

# =============================================================================
# Screenshots, downloads and uploads
# =============================================================================

SCREENSHOT_GROUP = PatternGroup(
    ErrorCategory.SCREENSHOT,
    "Screenshot Error",
    (
        r"\bscreenshot\s+(?:failed|timeout|error|capture\s+failed)\b",
        r"\bpage\.screenshot\s+(?:failed|error|timeout)\b",
        r"\bimage\s+capture\s+(?:failed|error|timeout)\b",
        r"\bscreenshot\s+(?:save|write)\s+(?:failed|error)\b",
        r"\bvisual\s+(?:capture|recording)\s+(?:failed|error)\b",
    ),
)

DOWNLOAD_GROUP = PatternGroup(
    ErrorCategory.DOWNLOAD,
    "Download Error",
    (
        r"\bdownload\s+(?:failed|timeout|error|cancelled)\b",
        r"\bwaitfordownload\s+(?:failed|timeout|error)\b",
        r"\bfile\s+download\s+(?:failed|interrupted|blocked)\b",
        r"\bdownload\s+(?:path|location)\s+(?:invalid|error|not\s+accessible)\b",
        r"\bdownload\s+(?:permission|security)\s+(?:error|denied)\b",
    ),
)

UPLOAD_GROUP = PatternGroup(
    ErrorCategory.UPLOAD,
    "Upload Error",
    (
        r"\bupload\s+(?:failed|timeout|error|rejected)\b",
        r"\bsetinputfiles\s+(?:failed|error|timeout)\b",
        r"\bfile\s+upload\s+(?:failed|error|blocked|too\s+large)\b",
        r"\bupload\s+(?:path|file)\s+(?:invalid|not\s+found|error)\b",
        r"\bfile\s+(?:selection|input)\s+(?:failed|error)\b",
    ),
)

# =============================================================================
# Network and HTTP
# =============================================================================

NETWORK_GROUP = PatternGroup(
    ErrorCategory.NETWORK,
    "Network Error",
    (
        r"\bnetwork\s+(?:error|failure|timeout|unavailable)\b",
        r"\bdns\s+(?:error|failure|resolution\s+failed|lookup\s+failed)\b",
        r"\bhost\s+(?:unreachable|not\s+found|unavailable)\b",
        r"\bconnection\s+(?:refused|reset|failed|timeout|lost)\b",
        r"\bnetwork\s+(?:connectivity|connection)\s+(?:lost|error)\b",
    ),
)

HTTP_CLIENT_GROUP = PatternGroup(
    ErrorCategory.HTTP_CLIENT,
    "HTTP Client Error",
    (
        r"\b(?:400|401|403|404|409|422|429)\b",
        r"\bclient\s+error\b",
        r"\bbad\s+request\b",
        r"\bunauthorized\b",
        r"\bforbidden\b",
        r"\bnot\s+found\b",
        r"\bconflict\b",
        r"\btoo\s+many\s+requests\b",
    ),
)

HTTP_SERVER_GROUP = PatternGroup(
    ErrorCategory.HTTP_SERVER,
    "HTTP Server Error",
    (
        r"\b(?:500|502|503|504)\b",
        r"\bserver\s+error\b",
        r"\binternal\s+server\s+error\b",
        r"\bservice\s+unavailable\b",
        r"\bgateway\s+(?:timeout|error)\b",
        r"\bbad\s+gateway\b",
    ),
)

CORS_GROUP = PatternGroup(
    ErrorCategory.CORS,
    "CORS Error",
    (
        r"\bcors\s+(?:error|policy|violation)\b",
        r"\bcross-origin\s+(?:request|error|blocked)\b",
        r"\baccess-control-allow-origin\b",
        r"\bcors\s+(?:preflight|header)\s+(?:failed|error)\b",
        r"\borigin\s+(?:not\s+allowed|blocked|rejected)\b",
    ),
)

INTERCEPT_GROUP = PatternGroup(
    ErrorCategory.INTERCEPT,
    "Network Interception Error",
    (
        r"\bpage\.route\s+(?:failed|error|timeout)\b",
        r"\brequest\s+interception\s+(?:failed|error|blocked)\b",
        r"\bmock\s+response\s+(?:failed|error|invalid)\b",
        r"\bnetwork\s+(?:mock|stub)\s+(?:failed|error)\b",
        r"\broute\s+(?:handler|interceptor)\s+(?:failed|error)\b",
    ),
)

# =============================================================================
# Authentication, authorization and security
# =============================================================================

AUTHENTICATION_GROUP = PatternGroup(
    ErrorCategory.AUTHENTICATION,
    "Authentication Error",
    (
        r"\bauthentication\s+(?:failed|error|required|invalid)\b",
        r"\blogin\s+(?:failed|error|required|invalid)\b",
        r"\binvalid\s+(?:credentials|username|password)\b",
        r"\bauth\s+(?:token|session)\s+(?:invalid|expired|missing)\b",
        r"\b(?:signin|sign-in)\s+(?:failed|error|required)\b",
    ),
)

AUTHORIZATION_GROUP = PatternGroup(
    ErrorCategory.AUTHORIZATION,
    "Authorization Error",
    (
        r"\bauthorization\s+(?:failed|error|required|denied)\b",
        r"\baccess\s+(?:denied|forbidden|restricted)\b",
        r"\bpermission\s+(?:denied|required|insufficient)\b",
        r"\bunauthorized\s+(?:access|operation|request)\b",
        r"\bprivileges?\s+(?:insufficient|required|missing)\b",
    ),
)

TOKEN_EXPIRED_GROUP = PatternGroup(
    ErrorCategory.TOKEN_EXPIRED,
    "Token Expired Error",
    (
        r"\btoken\s+(?:expired|invalid|missing|malformed)\b",
        r"\bjwt\s+(?:expired|invalid|malformed|signature\s+verification\s+failed)\b",
        r"\baccess\s+token\s+(?:expired|invalid|revoked)\b",
        r"\brefresh\s+token\s+(?:expired|invalid|missing)\b",
        r"\bbearer\s+token\s+(?:invalid|expired|missing)\b",
    ),
)

SECURITY_GROUP = PatternGroup(
    ErrorCategory.SECURITY,
    "Security Error",
    (
        r"\bsecurity\s+(?:error|violation|policy)\b",
        r"\bblocked\s+by\s+(?:security|policy|csp)\b",
        r"\bcontent\s+security\s+policy\b",
        r"\bmixed\s+content\s+(?:error|blocked)\b",
        r"\binsecure\s+(?:request|content|connection)\b",
        r"\bssl\s+(?:error|certificate|handshake)\s+(?:failed|error)\b",
        r"\bcertificate\s+(?:error|invalid|expired)\b",
    ),
)

# =============================================================================
# Timeouts
# =============================================================================

TIMEOUT_GROUP = PatternGroup(
    ErrorCategory.TIMEOUT,
    "Timeout Error",
    (
        r"\btimeout\s+(?:exceeded|error|reached)\b",
        r"\btimeout\s+\d+\s*ms\s+exceeded\b",
        r"\btimeout\s+of\s+\d+\s*ms\s+exceeded\b",
        r"\btimed\s+out\b",
        r"\bwait\s+timeout\b",
        r"\bnavigation\s+timeout\b",
        r"\blocator\s+timeout\b",
        r"\bexpect\s+timeout\b",
        r"\b\d+ms\s+timeout\b",
        r"\boperation\s+(?:timed\s+out|timeout)\b",
    ),
)

# =============================================================================
# Test framework
# =============================================================================

TEST_GROUP = PatternGroup(
    ErrorCategory.TEST,
    "Test Error",
    (
        r"\btest\s+(?:failed|error|timeout|assertion)\b",
        r"\bassertion\s+(?:failed|error|timeout)\b",
        r"\bexpected\s+.*\s+but\s+(?:got|received|was)\b",
        r"\bexpect.*(?:tobe|toequal|tomatch|tohave|tocontain).*failed\b",
        r"\btest\s+(?:suite|case)\s+(?:failed|error|timeout)\b",
        r"\bmatcher\s+(?:failed|error|not\s+found)\b",
        r"\bplaywright\s+(?:test|assertion)\s+(?:failed|error)\b",
    ),
)

FIXTURE_GROUP = PatternGroup(
    ErrorCategory.FIXTURE,
    "Test Fixture Error",
    (
        r"\bfixture\s+(?:failed|error|timeout|not\s+found)\b",
        r"\b(?:before|after)\s+(?:each|all)\s+(?:failed|error|timeout)\b",
        r"\bsetup\s+(?:failed|error|timeout)\b",
        r"\bteardown\s+(?:failed|error|timeout)\b",
        r"\btest\s+(?:data|fixture)\s+(?:failed|error|missing)\b",
    ),
)

# =============================================================================
# CSS, style and content verification
# =============================================================================

CSS_GROUP = PatternGroup(
    ErrorCategory.CSS,
    "CSS Error",
    (
        r"\bcss\s+(?:selector|rule|property)\s+(?:error|invalid|syntax\s+error)\b",
        r"\bcss\s+(?:parsing|syntax)\s+error\b",
        r"\bstylesheet\s+(?:loading|error|not\s+found|failed\s+to\s+load)\b",
        r"\bcss\s+(?:import|load)\s+(?:failed|error)\b",
        r"\bcss\s+(?:media|query)\s+(?:error|invalid)\b",
    ),
)

STYLE_GROUP = PatternGroup(
    ErrorCategory.STYLE,
    "Style Error",
    (
        r"\bstyle\s+(?:property|attribute)\s+(?:error|invalid|not\s+found)\b",
        r"\bcomputed\s+style\s+(?:error|failed|unavailable)\b",
        r"\binline\s+style\s+(?:error|invalid|parsing\s+failed)\b",
        r"\bstyle\s+(?:inheritance|cascade)\s+(?:error|issue|conflict)\b",
        r"\bstyle\s+(?:application|computation)\s+(?:failed|error)\b",
    ),
)

TEXT_VERIFICATION_GROUP = PatternGroup(
    ErrorCategory.TEXT_VERIFICATION,
    "Text Verification Error",
    (
        r"\btext\s+(?:verification|validation|check)\s+(?:failed|error|mismatch)\b",
        r"\btext\s+(?:content|value)\s+(?:mismatch|incorrect|error|unexpected)\b",
        r"\bexpected\s+text\s+(?:not\s+found|different|error|missing)\b",
        r"\btext\s+(?:assertion|comparison)\s+(?:failed|error|timeout)\b",
        r"\btext\s+(?:match|pattern)\s+(?:failed|error|not\s+found)\b",
    ),
)

CONTENT_MISMATCH_GROUP = PatternGroup(
    ErrorCategory.CONTENT_MISMATCH,
    "Content Mismatch Error",
    (
        r"\bcontent\s+(?:mismatch|different|unexpected|changed)\b",
        r"\bpage\s+content\s+(?:changed|incorrect|error|unexpected)\b",
        r"\bexpected\s+content\s+(?:not\s+found|missing|different)\b",
        r"\bcontent\s+(?:verification|validation)\s+(?:failed|error|mismatch)\b",
        r"\bcontent\s+(?:comparison|check)\s+(?:failed|error)\b",
    ),
)

# =============================================================================
# Runtime errors
# =============================================================================

TYPE_GROUP = PatternGroup(
    ErrorCategory.TYPE,
    "Type Error",
    (
        r"\btypeerror\b",
        r"\bcannot\s+read\s+propert(?:y|ies)\s+of\s+(?:null|undefined)\b",
        r"\bis\s+not\s+a\s+function\b",
        r"\bundefined\s+is\s+not\s+an?\s+(?:object|function)\b",
        r"\bcannot\s+set\s+propert(?:y|ies)\s+of\s+(?:null|undefined)\b",
        r"\bcannot\s+access\s+.*\s+before\s+initialization\b",
        r"\bcannot\s+convert\s+.*\s+to\s+(?:object|string|number)\b",
        r"\binvalid\s+assignment\s+to\s+const\b",
        r"\bobject\s+is\s+not\s+(?:callable|subscriptable|iterable)\b",
    ),
)

REFERENCE_GROUP = PatternGroup(
    ErrorCategory.REFERENCE,
    "Reference Error",
    (
        r"\breferenceerror\b",
        r"\bis\s+not\s+defined\b",
        r"\bundeclared\s+(?:variable|identifier)\b",
        r"\binvalid\s+left-hand\s+side\s+in\s+assignment\b",
        r"\bidentifier\s+.*\s+has\s+already\s+been\s+declared\b",
    ),
)

SYNTAX_GROUP = PatternGroup(
    ErrorCategory.SYNTAX,
    "Syntax Error",
    (
        r"\bsyntaxerror\b",
        r"\bunexpected\s+(?:token|identifier|end\s+of\s+input)\b",
        r"\binvalid\s+or\s+unexpected\s+token\b",
        r"\bmissing\s+(?:\)|;|,)\s+(?:after|before)\b",
        r"\bunmatched\s+(?:\(|\)|{|}|\[|\])",
        r"\billegal\s+(?:character|token|break\s+statement)\b",
        r"\bunexpected\s+end\s+of\s+(?:input|file)\b",
    ),
)

RANGE_GROUP = PatternGroup(
    ErrorCategory.RANGE,
    "Range Error",
    (
        r"\brangeerror\b",
        r"\binvalid\s+(?:array|string)\s+length\b",
        r"\bmaximum\s+call\s+stack\s+size\s+exceeded\b",
        r"\bmaximum\s+recursion\s+depth\s+exceeded\b",
        r"\bprecision\s+out\s+of\s+range\b",
        r"\binvalid\s+(?:count|radix|time)\s+value\b",
        r"\bnumber\s+(?:out\s+of\s+range|too\s+large|too\s+small)\b",
    ),
)

# =============================================================================
# File system
# =============================================================================

FILE_NOT_FOUND_GROUP = PatternGroup(
    ErrorCategory.FILE_NOT_FOUND,
    "File Not Found Error",
    (
        r"\benoent\b",
        r"\bfile\s+not\s+found\b",
        r"\bno\s+such\s+file\s+or\s+directory\b",
        r"\bcannot\s+find\s+(?:file|path|module)\b",
        r"\bpath\s+does\s+not\s+exist\b",
        r"\bresource\s+not\s+found\b",
        r"\bmissing\s+(?:file|resource|asset)\b",
    ),
)

FILE_EXISTS_GROUP = PatternGroup(
    ErrorCategory.FILE_EXISTS,
    "File Already Exists Error",
    (
        r"\beexist\b",
        r"\bfile\s+(?:already\s+exists|exists)\b",
        r"\bdirectory\s+(?:already\s+exists|exists)\b",
        r"\bcannot\s+create\s+.*\s+(?:file|directory)\s+exists\b",
        r"\bduplicate\s+(?:file|resource)\b",
    ),
)

ACCESS_DENIED_GROUP = PatternGroup(
    ErrorCategory.ACCESS_DENIED,
    "Access Denied Error",
    (
        r"\beacces\b",
        r"\beperm\b",
        r"\baccess\s+(?:denied|forbidden)\b",
        r"\bpermission\s+denied\b",
        r"\binsufficient\s+(?:permissions|privileges)\b",
        r"\bunauthorized\s+(?:access|operation)\b",
        r"\bcannot\s+(?:read|write|execute|access)\s+.*\s+permission\b",
    ),
)

FILE_TOO_LARGE_GROUP = PatternGroup(
    ErrorCategory.FILE_TOO_LARGE,
    "File Too Large Error",
    (
        r"\befbig\b",
        r"\bfile\s+(?:too\s+large|size\s+exceeded)\b",
        r"\bmaximum\s+file\s+size\s+(?:exceeded|reached)\b",
        r"\bfile\s+size\s+limit\s+(?:exceeded|reached)\b",
        r"\bbuffer\s+(?:too\s+large|overflow)\b",
        r"\bmemory\s+limit\s+exceeded\b",
    ),
)

# =============================================================================
# Connections, conflicts, versions, dialogs and mobile
# =============================================================================

CONNECTION_GROUP = PatternGroup(
    ErrorCategory.CONNECTION,
    "Connection Error",
    (
        r"\beconnrefused\b",
        r"\beconnreset\b",
        r"\bconnection\s+(?:refused|reset|failed|lost|dropped)\b",
        r"\bcannot\s+connect\s+to\s+(?:server|host|database)\b",
        r"\bconnection\s+(?:timeout|timed\s+out)\b",
        r"\bsocket\s+(?:error|timeout|connection\s+failed)\b",
        r"\bpeer\s+(?:reset|closed)\s+connection\b",
    ),
)

CONFLICT_GROUP = PatternGroup(
    ErrorCategory.CONFLICT,
    "Conflict Error",
    (
        r"\bconflict\s+(?:error|detected|resolution)\b",
        r"\bresource\s+(?:conflict|locked|busy)\b",
        r"\bconcurrent\s+(?:modification|access)\s+(?:error|conflict)\b",
        r"\bversion\s+conflict\b",
        r"\boptimistic\s+lock\s+(?:error|exception)\b",
        r"\bdata\s+(?:conflict|collision|race\s+condition)\b",
        r"\bmutex\s+(?:lock|conflict|timeout)\b",
    ),
)

API_VERSION_GROUP = PatternGroup(
    ErrorCategory.API_VERSION,
    "API Version Error",
    (
        r"\bapi\s+version\s+(?:mismatch|not\s+supported|deprecated)\b",
        r"\bversion\s+(?:not\s+supported|incompatible|outdated)\b",
        r"\bdeprecated\s+(?:api|endpoint|method)\b",
        r"\blegacy\s+(?:api|version)\s+(?:error|not\s+supported)\b",
        r"\bapi\s+(?:compatibility|backward\s+compatibility)\s+(?:error|issue)\b",
        r"\bschema\s+version\s+(?:mismatch|incompatible)\b",
    ),
)

DIALOG_GROUP = PatternGroup(
    ErrorCategory.DIALOG,
    "Dialog Error",
    (
        r"\bdialog\s+(?:not\s+found|error|timeout|handling)\b",
        r"\balert\s+(?:not\s+handled|error|timeout)\b",
        r"\bconfirm\s+(?:dialog|not\s+handled|error)\b",
        r"\bprompt\s+(?:dialog|not\s+handled|error)\b",
        r"\bmodal\s+(?:dialog|window)\s+(?:error|not\s+found|timeout)\b",
        r"\bpopup\s+(?:dialog|window)\s+(?:blocked|error|not\s+found)\b",
        r"\bjavascript\s+(?:alert|dialog)\s+(?:error|not\s+handled)\b",
    ),
)

MOBILE_DEVICE_GROUP = PatternGroup(
    ErrorCategory.MOBILE_DEVICE,
    "Mobile Device Error",
    (
        r"\bmobile\s+(?:device|emulation)\s+(?:error|failed|not\s+supported)\b",
        r"\bdevice\s+(?:orientation|rotation)\s+(?:error|failed)\b",
        r"\btouch\s+(?:events|gestures)\s+(?:not\s+supported|failed)\b",
        r"\bmobile\s+viewport\s+(?:error|mismatch|failed)\b",
        r"\buser\s+agent\s+(?:mobile|device)\s+(?:error|invalid)\b",
        r"\bdevice\s+(?:metrics|dimensions)\s+(?:error|invalid)\b",
        r"\bmobile\s+(?:browser|webview)\s+(?:error|not\s+supported)\b",
    ),
)

# =============================================================================
# Terminal catch-all
# =============================================================================

NOT_FOUND_GROUP = PatternGroup(
    ErrorCategory.NOT_FOUND,
    NOT_FOUND_CONTEXT,
    (
        r"not\s+found",
        r"does\s+not\s+exist",
        r"\bmissing\b",
        r"\bno\s+such\b",
    ),
)


PRIORITIZED_PATTERN_GROUPS: tuple[PatternGroup, ...] = (
    # Most specific and most common first
    TIMEOUT_GROUP,
    ELEMENT_GROUP,
    LOCATOR_GROUP,
    NETWORK_GROUP,
    PAGE_GROUP,
    BROWSER_GROUP,
    SELECTOR_GROUP,
    ELEMENT_STATE_GROUP,
    FRAME_GROUP,
    IFRAME_GROUP,
    KEYBOARD_GROUP,
    MOUSE_GROUP,
    DRAG_DROP_GROUP,
    HOVER_GROUP,
    GESTURE_GROUP,
    SCROLL_GROUP,
    TEXT_VERIFICATION_GROUP,
    CONTENT_MISMATCH_GROUP,
    SCREENSHOT_GROUP,
    DOWNLOAD_GROUP,
    UPLOAD_GROUP,
    COOKIE_GROUP,
    STORAGE_GROUP,
    TAB_GROUP,
    WINDOW_GROUP,
    CONTEXT_GROUP,
    VIEWPORT_GROUP,
    WAIT_CONDITION_GROUP,
    FRAME_TIMEOUT_GROUP,
    DIALOG_GROUP,
    HTTP_CLIENT_GROUP,
    HTTP_SERVER_GROUP,
    CORS_GROUP,
    INTERCEPT_GROUP,
    AUTHENTICATION_GROUP,
    AUTHORIZATION_GROUP,
    TOKEN_EXPIRED_GROUP,
    SECURITY_GROUP,
    CSS_GROUP,
    STYLE_GROUP,
    MOBILE_DEVICE_GROUP,
    # Runtime and filesystem groups repeat what the type/code stages already
    # catch, for errors that only carry the name in their text.
    TYPE_GROUP,
    REFERENCE_GROUP,
    SYNTAX_GROUP,
    RANGE_GROUP,
    FILE_NOT_FOUND_GROUP,
    FILE_EXISTS_GROUP,
    ACCESS_DENIED_GROUP,
    FILE_TOO_LARGE_GROUP,
    CONNECTION_GROUP,
    CONFLICT_GROUP,
    API_VERSION_GROUP,
    # Framework-internal failures last
    TEST_GROUP,
    FIXTURE_GROUP,
    SESSION_GROUP,
)
"""Groups scanned, in order, by the framework and free-text stages."""


def iter_pattern_groups() -> Iterator[PatternGroup]:
    """Yield every distinct pattern group: the prioritized list, then the catch-all."""
    yield from PRIORITIZED_PATTERN_GROUPS
    yield NOT_FOUND_GROUP


def find_pattern_group(category: ErrorCategory) -> PatternGroup | None:
    """Get the pattern group tagged with a category, if one exists."""
    for group in iter_pattern_groups():
        if group.category is category:
            return group
    return None


# =============================================================================
# Lookup tables for the type, code and status stages
# =============================================================================

NATIVE_ERROR_TYPES: dict[str, tuple[ErrorCategory, str]] = {
    "TypeError": (ErrorCategory.TYPE, "Type Error"),
    "ReferenceError": (ErrorCategory.REFERENCE, "Reference Error"),
    "SyntaxError": (ErrorCategory.SYNTAX, "Syntax Error"),
    "RangeError": (ErrorCategory.RANGE, "Range Error"),
    # Python counterparts
    "NameError": (ErrorCategory.REFERENCE, "Reference Error"),
    "UnboundLocalError": (ErrorCategory.REFERENCE, "Reference Error"),
    "IndentationError": (ErrorCategory.SYNTAX, "Syntax Error"),
    "TabError": (ErrorCategory.SYNTAX, "Syntax Error"),
    "IndexError": (ErrorCategory.RANGE, "Range Error"),
    "OverflowError": (ErrorCategory.RANGE, "Range Error"),
    "RecursionError": (ErrorCategory.RANGE, "Range Error"),
}
"""Runtime error type name -> (category, context)."""

SYSTEM_ERROR_CODES: dict[str, tuple[ErrorCategory, str]] = {
    "ENOENT": (ErrorCategory.FILE_NOT_FOUND, "File Not Found Error"),
    "EEXIST": (ErrorCategory.FILE_EXISTS, "File Already Exists Error"),
    "EACCES": (ErrorCategory.ACCESS_DENIED, "File Access Denied Error"),
    "EFBIG": (ErrorCategory.FILE_TOO_LARGE, "File Too Large Error"),
    "ECONNREFUSED": (ErrorCategory.CONNECTION, "Connection Refused Error"),
    "ECONNRESET": (ErrorCategory.CONNECTION, "Connection Reset Error"),
    "ETIMEDOUT": (ErrorCategory.TIMEOUT, "Connection Timeout Error"),
    "EHOSTUNREACH": (ErrorCategory.NETWORK, "Host Unreachable Error"),
    "ENETUNREACH": (ErrorCategory.NETWORK, "Network Unreachable Error"),
    "EPERM": (ErrorCategory.SECURITY, "Permission Denied Error"),
}
"""OS-style error code -> (category, context)."""

HTTP_STATUS_CATEGORIES: dict[int, tuple[ErrorCategory, str]] = {
    401: (ErrorCategory.AUTHENTICATION, "Authentication Error"),
    403: (ErrorCategory.AUTHORIZATION, "Authorization Error"),
    404: (ErrorCategory.NOT_FOUND, "Not Found Error"),
    409: (ErrorCategory.CONFLICT, "Conflict Error"),
    429: (ErrorCategory.RATE_LIMIT, "Rate Limit Error"),
}
"""HTTP status -> (category, context label). The status is appended to the label."""

MATCHER_NAME_HINTS: tuple[tuple[str, PatternGroup], ...] = (
    ("screenshot", SCREENSHOT_GROUP),
)
"""Matcher-name fragments that resolve to a group even when no pattern matches."""

HTTP_MESSAGE_HINTS: tuple[tuple[tuple[str, ...], ErrorCategory, str], ...] = (
    (
        ("cors", "cross-origin", "access-control-allow-origin"),
        ErrorCategory.CORS,
        "CORS Error",
    ),
    (
        ("token expired", "jwt expired", "token invalid"),
        ErrorCategory.TOKEN_EXPIRED,
        "Token Expired Error",
    ),
    (
        ("api version", "version not supported", "deprecated api"),
        ErrorCategory.API_VERSION,
        "API Version Error",
    ),
)
"""Substring hints checked by the HTTP stage when no decisive status is available."""
