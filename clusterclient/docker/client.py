import logging

from ..decoder import decode_list
from ..errors import BadParameters, Conflict, NotFound
from ..service import ServiceClient
from .objects import Container, Image

logger = logging.getLogger(__name__)

_REMOVE_ERRORS = {400: BadParameters, 404: NotFound, 409: Conflict}


def _flag(value):
    # the engine only understands lower case booleans
    return 'true' if value else 'false'


class DockerClient(ServiceClient):
    """Container and image operations against the Docker engine remote API"""

    _PORT = 2375
    _VERSION = None

    @staticmethod
    def _parse_error(payload):
        # {"message": "No such container: foo"}
        if isinstance(payload, dict) and 'message' in payload:
            return (None, payload['message'])

        return None

    def _make_container(self, data):
        return Container(client=self, data=data)

    def _make_image(self, data):
        return Image(client=self, data=data)

    def list_containers(self, all=False):
        """Return the containers on the host

        Args:
            all (bool): Include stopped containers

        Returns:
            list of Container
        """
        (_, content) = self._single_request('GET', self._url('containers', 'json'), params={'all': _flag(all)})

        return decode_list(content, self._make_container)

    def remove_container(self, name_or_id, delete_volumes=False, force=False):
        """Delete a container from the host

        Args:
            name_or_id (str): The container to remove
            delete_volumes (bool): Remove the volumes associated with the container
            force (bool): Kill the container first if it's running

        Returns:
            True: The container was removed

        Raises:
            clusterclient.errors.BadParameters: The engine rejected the parameters (400)
            clusterclient.errors.NotFound: No such container (404)
            clusterclient.errors.Conflict: The container can't be removed in its current state (409)
            clusterclient.errors.RemoteError: Any other failure
        """
        self._single_request(
            'DELETE',
            self._url('containers', name_or_id),
            params={'v': _flag(delete_volumes), 'force': _flag(force)},
            expected=(200, 204),
            errors=_REMOVE_ERRORS
        )

        logger.info('%s successfully removed from %s', name_or_id, self.config.host)

        return True

    def list_images(self, all=False):
        """Return the images on the host

        Args:
            all (bool): Include intermediate images

        Returns:
            list of Image
        """
        (_, content) = self._single_request('GET', self._url('images', 'json'), params={'all': _flag(all)})

        return decode_list(content, self._make_image)

    def create_image(self, from_image=None, from_src=None, repo=None, tag=None):
        """Create an image, either by pulling it from a registry or by importing it

        Only the arguments that are given are sent.

        Returns:
            True: The engine accepted the request

        Raises:
            clusterclient.errors.RemoteError: Any other response than 200
        """
        params = {
            'fromImage': from_image or None,
            'fromSrc': from_src or None,
            'repo': repo or None,
            'tag': tag or None,
        }

        self._single_request('POST', self._url('images', 'create'), params=params)

        logger.info('created image on %s from %s', self.config.host, from_image or from_src)

        return True

    def remove_image(self, image, force=False, no_prune=False):
        """Remove an image from the host's filesystem

        Args:
            image (str): Name or ID of the image
            force (bool): Remove the image even if it's in use
            no_prune (bool): Keep untagged parent images

        Returns:
            True: The image was removed

        Raises:
            clusterclient.errors.NotFound: No such image (404)
            clusterclient.errors.Conflict: The image is in use (409)
            clusterclient.errors.RemoteError: Any other failure
        """
        self._single_request(
            'DELETE',
            self._url('images', image),
            params={'force': _flag(force), 'noprune': _flag(no_prune)},
            expected=(200, 204),
            errors=_REMOVE_ERRORS
        )

        logger.info('%s successfully removed from %s', image, self.config.host)

        return True
