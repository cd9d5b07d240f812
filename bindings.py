class bindings(object):
    """Bind attributes of a namespace (usually a settings module such as
    printfvars) to the given values in the dynamic scope of a
    with-statement, restoring the previous values on exit.  Only existing
    attributes may be bound, so a misspelled setting is an AttributeError
    rather than a silent no-op.  The same instance may be entered again
    while active."""

    def __init__(self, namespace, **values):
        for name in values:
            if not hasattr(namespace, name):
                raise AttributeError("%r has no setting named %r"
                                     % (namespace, name))
        self.namespace = namespace
        self.values = values
        self.saved = []

    def __enter__(self):
        self.saved.append(dict((name, getattr(self.namespace, name))
                               for name in self.values))
        for name, value in self.values.items():
            setattr(self.namespace, name, value)
        return self.namespace

    def __exit__(self, *exc_info):
        for name, value in self.saved.pop().items():
            setattr(self.namespace, name, value)
