"""Web-server rewrite rules for a front-controller setup.

Produces an Apache ``mod_rewrite`` block that forwards every request for
something other than an existing file or directory to a single receiver
script, which then calls ``Dispatcher.handle()``.

Rendered with kida; no dispatcher state is involved.
"""

from kida import Environment

from urldispatch.config import DispatcherConfig

HTACCESS_TEMPLATE = """\
<IfModule mod_rewrite.c>
RewriteEngine On
RewriteBase /
RewriteCond %{REQUEST_FILENAME} !-f
RewriteCond %{REQUEST_FILENAME} !-d
RewriteRule . {{ receiver }} [L]
</IfModule>
"""


def create_htaccess(base_dir: str = "", receiver_file: str | None = None) -> str:
    """Return an ``.htaccess`` body routing unknown paths to *receiver_file*.

    *receiver_file* defaults to ``DispatcherConfig.receiver_file``.

    *base_dir* is the site's root directory on the web server; one trailing
    ``/`` is dropped before it is joined with *receiver_file*::

        create_htaccess("/blog/", "index.py")  # ... RewriteRule . /blog/index.py [L]
    """
    if receiver_file is None:
        receiver_file = DispatcherConfig().receiver_file
    if base_dir.endswith("/"):
        base_dir = base_dir[:-1]
    receiver = f"{base_dir}/{receiver_file}"

    env = Environment(autoescape=False)
    return env.from_string(HTACCESS_TEMPLATE).render({"receiver": receiver})
