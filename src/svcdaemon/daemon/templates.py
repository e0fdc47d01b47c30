"""Service-definition templates and the renderer that fills them.

Placeholders are written ``{{ name }}``. The renderer is a ``string.Template``
subclass with a custom pattern, so the ``$var`` syntax used throughout the
init script passes through untouched. ``{{{{`` renders a literal ``{{``.

Unknown placeholder names and malformed ``{{`` sequences raise
TemplateRenderError rather than producing a truncated definition file.
"""

from collections.abc import Mapping
from string import Template

from svcdaemon.errors import TemplateRenderError


class DefinitionTemplate(Template):
    """``{{ name }}`` placeholder syntax for service definitions."""

    delimiter = "{{"
    pattern = r"""
    \{\{(?:
        (?P<escaped>\{\{)                           |
        \s*(?P<named>[_a-z][_a-z0-9]*)\s*\}\}       |
        (?P<braced>(?!x)x)                          |
        (?P<invalid>)
    )
    """


def render_template(template: str, fields: Mapping[str, object]) -> str:
    """Fill ``template`` with ``fields``.

    Args:
        template: Template text using ``{{ name }}`` placeholders
        fields: Placeholder values; converted with ``str()``

    Returns:
        The rendered text

    Raises:
        TemplateRenderError: If a placeholder has no value or the template
            contains a malformed placeholder
    """
    try:
        return DefinitionTemplate(template).substitute(fields)
    except KeyError as e:
        raise TemplateRenderError(f"No value for template placeholder {e.args[0]!r}") from e
    except ValueError as e:
        raise TemplateRenderError(f"Malformed service template: {e}") from e


SYSV_INIT_SCRIPT = """#! /bin/sh
#
#       /etc/rc.d/init.d/{{ name }}
#
#       Starts {{ name }} as a daemon
#
# chkconfig: 2345 87 17
# description: Starts and stops a single {{ name }} instance on this system

### BEGIN INIT INFO
# Provides: {{ name }}
# Required-Start: $network $named
# Required-Stop: $network $named
# Default-Start: 2 3 4 5
# Default-Stop: 0 1 6
# Short-Description: This service manages the {{ description }}.
# Description: {{ description }}
### END INIT INFO

#
# Source function library.
#
if [ -f /etc/rc.d/init.d/functions ]; then
    . /etc/rc.d/init.d/functions
fi

exec="{{ path }}"
servname="{{ description }}"
port="{{ port }}"
version="{{ version }}"

proc="{{ name }}"
pidfile="{{ pid_dir }}/$proc.pid"
lockfile="/var/lock/subsys/$proc"
stdoutlog="{{ log_dir }}/$proc.log"
stderrlog="{{ log_dir }}/$proc.err"

privilegeCheck() {
    testFile="/var/tmp/${proc}_testPriv.t"
    touch $testFile
    chown root:root $testFile 2>/dev/null
    if [ $? != 0 ]; then
        rm -f $testFile
        echo "Error:  You must have root user privileges. Possibly using 'sudo' command should help"
        exit 1
    fi
    rm -f $testFile
    if [ $? != 0 ]; then
        echo "Error:  You must have root user privileges. Possibly using 'sudo' command should help"
        exit 1
    fi
}

# root or sudo command
privilegeCheck

[ -d $(dirname $lockfile) ] || mkdir -p $(dirname $lockfile)

[ -e /etc/sysconfig/$proc ] && . /etc/sysconfig/$proc

start() {
    [ -x $exec ] || exit 5

    if [ -f $pidfile ]; then
        if ! [ -d "/proc/$(cat $pidfile)" ]; then
            rm $pidfile
            if [ -f $lockfile ]; then
                rm $lockfile
            fi
        fi
    fi

    if ! [ -f $pidfile ]; then
        printf "Starting $servname:\\t"
        if [ $? != 0 ]; then
            echo -n "Starting $servname:     "
        fi
        echo "$(date)" >> $stdoutlog
        $exec {{ args }} >> $stdoutlog 2>> $stderrlog &
        echo $! > $pidfile
        touch $lockfile
        success 2>/dev/null
        if [ $? != 0 ]; then
            echo "[ OK ]"
        else
            echo
        fi
    else
        # failure
        echo
        printf "$pidfile still exists...\\n"
        if [ $? != 0 ]; then
            echo "$pidfile still exists..."
        fi
        exit 7
    fi
}

stop() {
    printf "Stopping $servname:\\t"
    if [ $? != 0 ]; then
        echo -n "Stopping $servname:     "
    fi
    kill -9 $(cat $pidfile) && rm -f $pidfile
    retval=$?
    [ $retval -eq 0 ] && rm -f $lockfile
    if [ $? != 0 ]; then
        failure 2>/dev/null
        if [ $? != 0 ]; then
            echo "[ FAILED ]"
        else
            echo
        fi
    else
        success 2>/dev/null
        if [ $? != 0 ]; then
            echo "[ OK ]"
        else
            echo
        fi
    fi
    return $retval
}

clear() {
    rm -f $pidfile
    rm -f $lockfile
}

restart() {
    stop >/dev/null 2>/dev/null
    start
}

rh_status() {
        pidCmd=$(lsof -i:${port} | awk '{print $2;}' | sed -n 2p)
        if [ ! -f "$pidfile" ] && [ -z "$pidCmd" ]; then
            echo "$servname ($proc) is stopped";
            return 1;
        fi
        pid=$(cat $pidfile);
        if [ "$pidCmd" != "$pid" ]; then
            if [ ! -z "$pid" ]; then
                kill -9 $pid
            fi
            if [ ! -z "$pidCmd" ]; then
                echo "$pidCmd" > "$pidfile";
                touch $lockfile
                echo "$servname ($proc) is running [pid  $(cat $pidfile)]";
                return 0;
            fi
            clear
            echo "$servname ($proc) is stopped";
            return 1;
        fi
        echo "$servname ($proc) is running [pid  $pid]";
        return 0;
}

rh_status_q() {
    rh_status >/dev/null 2>&1
}

case "$1" in
    start)
        rh_status_q && exit 0
        $1
        ;;
    stop)
        rh_status_q || exit 0
        $1
        ;;
    restart)
        $1
        ;;
    status)
        rh_status
        ;;
    version)
        echo $version
        ;;
    description)
        echo $servname
        ;;
    execpath)
        echo $exec
        ;;
    *)
        echo "Usage: $0 {start|stop|status|restart|version|description|execpath}"
        exit 2
esac

exit $?
"""


SYSTEMD_UNIT = """[Unit]
Description={{ description }}
Requires={{ dependencies }}
After={{ dependencies }}

[Service]
PIDFile={{ pid_dir }}/{{ name }}.pid
ExecStartPre=/bin/rm -f {{ pid_dir }}/{{ name }}.pid
ExecStart={{ path }}
Restart=on-abort
X-Port={{ port }}
X-Version={{ version }}

[Install]
WantedBy=multi-user.target
"""


LAUNCHD_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple Computer//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<!-- {{ description }} {{ version }} port {{ port }} -->
<dict>
    <key>Label</key>
    <string>{{ name }}</string>
    <key>ProgramArguments</key>
    <array>
{{ program_arguments }}
    </array>
    <key>RunAtLoad</key>
    <true/>
    <key>KeepAlive</key>
    <dict>
        <key>SuccessfulExit</key>
        <false/>
    </dict>
    <key>WorkingDirectory</key>
    <string>/usr/local/var</string>
    <key>StandardOutPath</key>
    <string>{{ log_dir }}/{{ name }}.log</string>
    <key>StandardErrorPath</key>
    <string>{{ log_dir }}/{{ name }}.err</string>
</dict>
</plist>
"""
