"""
Progparams registry: ordered ownership of descriptors.

The registry is the sole owner of descriptor storage. Descriptors live in one
list and are addressed by their stable index; the alias table maps every name
to an index and the positional sequence keeps the indices of positional
descriptors in registration order. The registry is built once, then used for
a single parse pass (found flags are never reset).
"""
from .descriptors import Descriptor
from .faults import FaultCode, ConfigurationError, ExhaustedError, MissingRequiredError, NotFoundError, getdoc
from .utils import Unset


class Registry:
    """
    Ordered collection of descriptors with alias lookup and a positional cursor.

    Attributes
    - descriptors: every descriptor, by registration index.
    - by_name: alias (or positional placeholder) → descriptor index.
    - positionals: indices of positional descriptors, in registration order.
    """

    def __init__(self):
        self.descriptors = []
        self.by_name = {}
        self.positionals = []
        self._cursor = 0

    def __len__(self):
        return len(self.descriptors)

    def __iter__(self):
        return iter(self.descriptors)

    def __contains__(self, alias):
        return alias in self.by_name

    def register(self, names, /, required=False, slot=Unset):
        """
        Create a descriptor and index its names.

        Returns the index of the new descriptor.

        Raises ConfigurationError when the names are invalid for a descriptor
        or when any of them is already registered (aliases are never overwritten),
        and when the slot already belongs to another descriptor.
        """
        descriptor = Descriptor(names, required, slot)

        for name in descriptor.names:
            if name in self.by_name:
                raise ConfigurationError(
                    "parameter name %r is already registered" % name,
                    title="duplicated alias",
                    code=FaultCode.DUPLICATED_ALIAS,
                    hint="pick a different alias for %r" % (descriptor.names,),
                    docs=getdoc(FaultCode.DUPLICATED_ALIAS),
                    name=name,
                )

        for owner in self.descriptors:
            if owner.slot is descriptor.slot:
                raise ConfigurationError(
                    "slot of %r is already owned by %r" % (descriptor.name, owner.name),
                    title="shared slot",
                    code=FaultCode.SHARED_SLOT,
                    hint="give %r its own Slot, or add %r as an alias of %r" % (
                        descriptor.name, descriptor.name, owner.name
                    ),
                    docs=getdoc(FaultCode.SHARED_SLOT),
                    name=descriptor.name,
                    owner=owner,
                )

        index = len(self.descriptors)
        self.descriptors.append(descriptor)
        self.by_name.update(dict.fromkeys(descriptor.names, index))
        if descriptor.positional:
            self.positionals.append(index)
        return index

    def lookup(self, alias, /):
        try:
            return self.descriptors[self.by_name[alias]]
        except KeyError:
            raise NotFoundError(
                "parameter %r is not registered" % alias,
                title="parameter not found",
                code=FaultCode.PARAMETER_NOT_FOUND,
                hint="registered names: %s" % (", ".join(map(repr, self.by_name)) or "none"),
                docs=getdoc(FaultCode.PARAMETER_NOT_FOUND),
                alias=alias,
            ) from None

    def next_positional(self):
        """
        Return the next positional descriptor in registration order.

        Raises ExhaustedError once every positional has been handed out.
        """
        try:
            index = self.positionals[self._cursor]
        except IndexError:
            raise ExhaustedError(
                "no positional parameter left (%d declared)" % len(self.positionals),
                title="unexpected positional",
                code=FaultCode.UNEXPECTED_POSITIONAL,
                hint="remove the extra value, or put '--' before values that start with '-'",
                docs=getdoc(FaultCode.UNEXPECTED_POSITIONAL),
                declared=len(self.positionals),
            ) from None
        self._cursor += 1
        return self.descriptors[index]

    def audit_required(self):
        """
        Fail with MissingRequiredError on the first required descriptor that was
        not found, scanning options first, then positionals, each in
        registration order.
        """
        options = (descriptor for descriptor in self.descriptors if not descriptor.positional)
        positionals = (self.descriptors[index] for index in self.positionals)
        for group in (options, positionals):
            for descriptor in group:
                if descriptor.required and not descriptor.found:
                    kind = "positional" if descriptor.positional else "option"
                    raise MissingRequiredError(
                        "required %s %r was not provided" % (kind, descriptor.name),
                        title="missing required %s" % kind,
                        code=FaultCode.MISSING_REQUIRED,
                        hint="add %s" % (
                            "a value for %r" % descriptor.name if descriptor.positional else
                            " or ".join(map(repr, descriptor.names))
                        ),
                        docs=getdoc(FaultCode.MISSING_REQUIRED),
                        descriptor=descriptor,
                    )

    def __rich_repr__(self):
        yield "descriptors", self.descriptors
        yield "by_name", self.by_name
        yield "positionals", self.positionals

    def __repr__(self):
        return "registry(descriptors=%r, by_name=%r, positionals=%r)" % (
            self.descriptors, self.by_name, self.positionals
        )


__all__ = (
    "Registry",
)
